"""Conversation history for agent-server.

This package provides the append-only conversation history and the
in-memory store that owns every conversation.
"""

from agent_server.conversations.conversation import Conversation, to_ollama_messages
from agent_server.conversations.store import ConversationStore
from agent_server.conversations.types import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolMessage,
    UserMessage,
)

__all__ = [
    # Core classes
    "Conversation",
    "ConversationStore",
    "to_ollama_messages",
    # Message types
    "Message",
    "UserMessage",
    "SystemMessage",
    "AssistantMessage",
    "ToolMessage",
]
