"""Agent orchestrating tool-augmented conversations.

This module provides the Agent class which owns the conversation store, the
tool registry, the capability sources and the retrieval engine, and runs the
turn loop: send the history and tool descriptors to the model, execute any
requested tool calls in order, append their results, and repeat until the
model answers without tool calls or the iteration cap is reached.
"""

import json
import logging
from pathlib import Path
from typing import Any

from agent_server.agent.errors import (
    MaxIterationsError,
    ModelUnavailableError,
    ToolNotFoundError,
)
from agent_server.agent.types import ChatResult, ToolCallRecord
from agent_server.capabilities import CapabilityManager, SourceStartResult
from agent_server.config import AgentServerSettings
from agent_server.conversations import (
    AssistantMessage,
    Conversation,
    ConversationStore,
    Message,
    SystemMessage,
    ToolMessage,
    UserMessage,
    to_ollama_messages,
)
from agent_server.ollama import OllamaClient
from agent_server.rag import ImportResult, RetrievalEngine, SearchResult
from agent_server.tools import FileTools, ToolRegistry, tool_to_ollama

logger = logging.getLogger(__name__)

QUESTION_PREFIX = "\n用户问题 (Question): "


def _normalize_tool_calls(raw_calls: Any) -> list[dict[str, Any]]:
    """Reduce model tool calls to {"function": {"name", "arguments"}} dicts."""
    calls: list[dict[str, Any]] = []
    for raw in raw_calls or []:
        function = raw.get("function") or {}
        arguments = function.get("arguments") or {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except ValueError:
                logger.warning(f"Unparseable arguments for tool {function.get('name')}")
                arguments = {}
        if not isinstance(arguments, dict):
            logger.warning(
                f"Arguments for tool {function.get('name')} are not an object: {arguments!r}"
            )
            arguments = {}
        calls.append(
            {"function": {"name": function.get("name", ""), "arguments": dict(arguments)}}
        )
    return calls


class Agent:
    """Runs the turn loop between a user, the model and the registered tools.

    The registry, conversation store, retrieval engine and capability manager
    are created per Agent unless injected, so several agents can coexist.

    Attributes:
        settings: The application settings
        ollama_client: Client for chat and embedding requests
        tool_registry: Registry the turn loop resolves tools from
        conversations: Store holding every conversation
        retrieval: Retrieval engine for augmented chats
        capabilities: Manager of the external MCP servers
        max_iterations: Cap on model round trips per chat request
    """

    def __init__(
        self,
        settings: AgentServerSettings,
        ollama_client: OllamaClient,
        tool_registry: ToolRegistry | None = None,
        conversation_store: ConversationStore | None = None,
        retrieval: RetrievalEngine | None = None,
        capability_manager: CapabilityManager | None = None,
    ) -> None:
        self.settings = settings
        self.ollama_client = ollama_client
        self.tool_registry = tool_registry or ToolRegistry()
        self.conversations = conversation_store or ConversationStore()
        self.retrieval = retrieval or RetrievalEngine(
            self._embed,
            chunk_size=settings.rag.chunk_size,
            chunk_overlap=settings.rag.chunk_overlap,
        )
        self.capabilities = capability_manager or CapabilityManager(
            settings.mcp_servers
        )
        self.max_iterations = settings.max_iterations

    async def _embed(self, text: str) -> list[float]:
        return await self.ollama_client.embed(self.settings.rag.embed_model, text)

    # --- Lifecycle ---

    async def start(self) -> list[SourceStartResult]:
        """Register builtin tools and start all capability sources.

        Returns:
            list[SourceStartResult]: One result per configured MCP server
        """
        if self.settings.local_tools.enabled:
            try:
                file_tools = FileTools(self.settings.resolved_tools_root)
            except FileNotFoundError as e:
                logger.warning(f"Builtin file tools disabled: {e}")
            else:
                for tool in file_tools.tool_infos():
                    self.tool_registry.register(tool)
                logger.info(f"Builtin file tools registered with root {file_tools.root}")

        results = await self.capabilities.start()

        external_tools = self.capabilities.get_all_tools()
        for tool in external_tools:
            self.tool_registry.register(tool)
        logger.info(f"External MCP tools registered: {len(external_tools)}")

        logger.info(f"Agent started with {self.tool_registry.count()} tools")
        return results

    async def stop(self) -> None:
        """Stop all capability sources."""
        await self.capabilities.stop()
        logger.info("Agent stopped")

    # --- Tools ---

    def list_tools(self) -> list[dict[str, str]]:
        """Describe every registered tool as {name, description, source}."""
        return [
            {"name": tool.name, "description": tool.description, "source": tool.source}
            for tool in self.tool_registry.list()
        ]

    def tool_specs(self) -> list[dict[str, Any]]:
        """Build the Ollama descriptors of every registered tool."""
        return [tool_to_ollama(tool) for tool in self.tool_registry.list()]

    async def execute_tool_call(self, name: str, arguments: dict[str, Any]) -> str:
        """Execute one tool call, turning any failure into an error text.

        Args:
            name: The requested tool name
            arguments: The arguments supplied by the model

        Returns:
            str: The tool result, or "Error: <reason>" if the tool is unknown
                 or fails
        """
        tool = self.tool_registry.get(name)
        try:
            if tool is None:
                raise ToolNotFoundError(name)
            return await tool.executor.execute(arguments)
        except Exception as e:
            logger.error(f"Tool call {name} failed: {e}")
            return f"Error: {e}"

    # --- Chat ---

    async def chat(
        self,
        message: str,
        conversation_id: str | None = None,
        model: str | None = None,
    ) -> ChatResult:
        """Process a user message and run the turn loop to a final answer.

        Args:
            message: The user message
            conversation_id: Conversation to continue; created when unknown
            model: Model override for this request

        Returns:
            ChatResult: The final answer, the tool call trace and the
                        conversation ID

        Raises:
            ModelUnavailableError: If a model request fails
            MaxIterationsError: If the iteration cap is reached
        """
        conversation = self.conversations.get_or_create(conversation_id)
        conversation.add_message(UserMessage(content=message))
        return await self._run_turn_loop(conversation, model)

    async def chat_with_retrieval(
        self,
        message: str,
        conversation_id: str | None = None,
        model: str | None = None,
    ) -> ChatResult:
        """Like chat(), with retrieved document context prepended to the message.

        When retrieval fails the message is sent without context.
        """
        try:
            context = await self.retrieval.get_context(message, self.settings.rag.top_k)
        except Exception as e:
            logger.error(f"Failed to get retrieval context: {e}")
            context = ""

        enhanced_message = message
        if context:
            enhanced_message = context + QUESTION_PREFIX + message

        conversation = self.conversations.get_or_create(conversation_id)
        conversation.add_message(UserMessage(content=enhanced_message))
        return await self._run_turn_loop(conversation, model)

    def _build_model_messages(self, conversation: Conversation) -> list[dict[str, Any]]:
        messages: list[Message] = []
        system_prompt = self.settings.ollama.system_prompt
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.extend(conversation.get_messages())
        return to_ollama_messages(messages)

    async def _run_turn_loop(
        self, conversation: Conversation, model: str | None
    ) -> ChatResult:
        model = model or self.settings.ollama.model
        trace: list[ToolCallRecord] = []

        for iteration in range(self.max_iterations):
            messages = self._build_model_messages(conversation)
            tools = self.tool_specs()

            try:
                response = await self.ollama_client.chat(
                    model=model, messages=messages, tools=tools
                )
            except Exception as e:
                logger.error(f"Ollama chat failed: {e}")
                raise ModelUnavailableError(f"Ollama chat failed: {e}") from e

            reply = response.get("message") or {}
            content = reply.get("content") or ""
            tool_calls = _normalize_tool_calls(reply.get("tool_calls"))

            conversation.add_message(
                AssistantMessage(content=content, model=model, tool_calls=tool_calls or None)
            )

            if not tool_calls:
                logger.info(
                    f"Conversation {conversation.conversation_id} answered after "
                    f"{iteration + 1} round trips and {len(trace)} tool calls"
                )
                return ChatResult(
                    response=content,
                    conversation_id=conversation.conversation_id,
                    tool_calls=trace,
                )

            logger.debug(f"Processing {len(tool_calls)} tool calls")
            for call in tool_calls:
                name = call["function"]["name"]
                arguments = call["function"]["arguments"]

                result = await self.execute_tool_call(name, arguments)

                trace.append(ToolCallRecord(tool=name, arguments=arguments, result=result))
                conversation.add_message(ToolMessage(tool_name=name, content=result))

        logger.error(
            f"Conversation {conversation.conversation_id} reached "
            f"{self.max_iterations} iterations"
        )
        raise MaxIterationsError(self.max_iterations)

    # --- Retrieval ---

    async def add_document(
        self, document_id: str, content: str, metadata: dict[str, str] | None = None
    ) -> int:
        """Split, embed and store a document. Returns the chunk count."""
        return await self.retrieval.add_document(document_id, content, metadata)

    async def add_document_chunks(
        self,
        document_id: str,
        chunks: list[str],
        metadata: dict[str, str] | None = None,
    ) -> int:
        """Embed and store a pre-split document. Returns the chunk count."""
        return await self.retrieval.add_document_with_chunks(document_id, chunks, metadata)

    async def search_documents(self, query: str) -> list[SearchResult]:
        """Search stored chunks using the configured top-K."""
        return await self.retrieval.search(query, self.settings.rag.top_k)

    async def import_documents(self, directory: str | Path) -> list[ImportResult]:
        """Import every markdown file of a directory."""
        return await self.retrieval.import_directory(directory)

    def document_count(self) -> int:
        """Number of stored chunks."""
        return self.retrieval.document_count()

    def clear_documents(self) -> None:
        """Remove every stored chunk."""
        self.retrieval.clear()
