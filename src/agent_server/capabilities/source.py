"""Adapter for one external MCP server running as a subprocess.

The adapter launches the configured command, opens an MCP client session over
stdio, discovers the advertised tools once, and forwards tool calls through
the open session until it is closed.
"""

import logging
import time
from contextlib import AsyncExitStack
from datetime import timedelta
from typing import Any

from mcp import ClientSession, StdioServerParameters
from mcp import types as mcp_types
from mcp.client.stdio import get_default_environment, stdio_client

from agent_server.config import CapabilitySourceConfig
from agent_server.tools.types import RemoteToolExecutor, ToolInfo

logger = logging.getLogger(__name__)

SUPPORTED_TRANSPORTS = ("stdio",)


class CapabilitySourceError(Exception):
    """Raised when a capability source cannot be reached or a call fails."""


class CapabilitySource:
    """One long-lived MCP subprocess and its client session.

    The source owns the subprocess: ``close()`` must be called from the same
    task that called ``connect()``.

    Attributes:
        config: The source configuration
        name: The configured source name
        tools: Tools advertised by the server at connect time
    """

    def __init__(self, config: CapabilitySourceConfig) -> None:
        self.config = config
        self.name = config.name
        self.tools: list[mcp_types.Tool] = []
        self._session: ClientSession | None = None
        self._exit_stack: AsyncExitStack | None = None

    @property
    def source_tag(self) -> str:
        """Origin tag attached to every tool of this source."""
        return f"mcp:{self.name}"

    @property
    def connected(self) -> bool:
        return self._session is not None

    def _server_parameters(self) -> StdioServerParameters:
        env = None
        if self.config.env:
            env = {**get_default_environment(), **self.config.env}
        return StdioServerParameters(
            command=self.config.command,
            args=list(self.config.args),
            env=env,
        )

    async def connect(self) -> list[mcp_types.Tool]:
        """Launch the server, initialize the session and discover its tools.

        Returns:
            list[mcp_types.Tool]: The tools advertised by the server

        Raises:
            CapabilitySourceError: If the transport is unsupported, the process
                                   cannot be started or the handshake fails
        """
        if self.config.transport not in SUPPORTED_TRANSPORTS:
            raise CapabilitySourceError(
                f"Unsupported transport '{self.config.transport}' for {self.name}"
            )

        logger.info(
            f"Starting MCP client {self.name}: {self.config.command} {self.config.args}"
        )

        exit_stack = AsyncExitStack()
        try:
            read_stream, write_stream = await exit_stack.enter_async_context(
                stdio_client(self._server_parameters())
            )
            session = await exit_stack.enter_async_context(
                ClientSession(
                    read_stream,
                    write_stream,
                    read_timeout_seconds=timedelta(seconds=self.config.timeout),
                )
            )
            await session.initialize()
            result = await session.list_tools()
        except Exception as e:
            try:
                await exit_stack.aclose()
            except Exception as close_error:
                logger.warning(
                    f"Failed to clean up MCP client {self.name}: {close_error}"
                )
            raise CapabilitySourceError(
                f"Failed to connect to MCP server {self.name}: {e}"
            ) from e

        self._exit_stack = exit_stack
        self._session = session
        self.tools = list(result.tools)

        logger.info(f"MCP client {self.name} connected with {len(self.tools)} tools")
        return self.tools

    def tool_infos(self) -> list[ToolInfo]:
        """Describe the discovered tools for registration in a ToolRegistry."""
        return [
            ToolInfo(
                name=tool.name,
                source=self.source_tag,
                description=tool.description or "",
                input_schema=tool.inputSchema or {},
                executor=RemoteToolExecutor(source=self, tool_name=tool.name),
            )
            for tool in self.tools
        ]

    async def call_tool(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """Invoke a tool on the server and return its text result.

        Args:
            tool_name: The tool to call
            arguments: The tool arguments

        Returns:
            str: The text of the first text content item in the result

        Raises:
            CapabilitySourceError: If the source is not connected, the call
                                   fails, the server reports an error or the
                                   result carries no text
        """
        if self._session is None:
            raise CapabilitySourceError(f"MCP server {self.name} is not connected")

        logger.info(f"Calling tool {tool_name} on {self.name} with args {arguments}")

        started = time.perf_counter()
        try:
            result = await self._session.call_tool(tool_name, arguments)
        except Exception as e:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"Tool {tool_name} on {self.name} failed after {duration_ms:.2f}ms: {e}"
            )
            raise CapabilitySourceError(f"Call tool failed: {e}") from e

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(f"Tool {tool_name} on {self.name} completed in {duration_ms:.2f}ms")

        text = next(
            (
                item.text
                for item in result.content
                if isinstance(item, mcp_types.TextContent)
            ),
            None,
        )

        if result.isError:
            raise CapabilitySourceError(text or f"Tool {tool_name} reported an error")
        if text is None:
            raise CapabilitySourceError("No text content in result")

        return text

    async def close(self) -> None:
        """Close the session and terminate the subprocess."""
        exit_stack = self._exit_stack
        self._exit_stack = None
        self._session = None

        if exit_stack is not None:
            logger.debug(f"Stopping MCP client {self.name}")
            await exit_stack.aclose()
