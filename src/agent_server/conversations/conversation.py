"""Conversation class holding the message history of one chat.

A conversation is append-only: messages are added in causal turn order and
are never edited, removed or reordered.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from agent_server.conversations.types import Message

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Get the current UTC time as an ISO 8601 string with a Z suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def to_ollama_messages(messages: list[Message]) -> list[dict[str, Any]]:
    """Convert conversation messages to Ollama API format.

    Args:
        messages: List of message objects

    Returns:
        List of message dicts in Ollama format: [{"role": "...", "content": "..."}, ...]
    """
    ollama_messages = []

    for msg in messages:
        ollama_msg: dict[str, Any] = {
            "role": msg.role,
            "content": msg.content,
        }

        # Add tool_calls for assistant messages that have them
        if getattr(msg, "tool_calls", None):
            ollama_msg["tool_calls"] = msg.tool_calls

        if getattr(msg, "tool_name", ""):
            ollama_msg["tool_name"] = msg.tool_name

        ollama_messages.append(ollama_msg)

    return ollama_messages


class Conversation:
    """An ordered, append-only message history.

    Attributes:
        conversation_id: Opaque identifier supplied by the caller or generated
    """

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        self._messages: list[Message] = []
        self._lock = threading.Lock()

    def add_message(self, message: Message) -> None:
        """Append a message to the history.

        Args:
            message: The message to add
        """
        if not message.timestamp:
            message.timestamp = utc_timestamp()
        with self._lock:
            self._messages.append(message)

    def get_messages(self) -> list[Message]:
        """Get a snapshot of the message history, oldest first."""
        with self._lock:
            return list(self._messages)

    @property
    def message_count(self) -> int:
        """Number of messages in the history."""
        with self._lock:
            return len(self._messages)

    @staticmethod
    def generate_id() -> str:
        """Generate a new unique conversation ID."""
        return str(uuid.uuid4())
