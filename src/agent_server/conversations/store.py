"""In-memory store mapping conversation IDs to conversations."""

import logging
import threading

from agent_server.conversations.conversation import Conversation

logger = logging.getLogger(__name__)


class ConversationStore:
    """Holds every conversation for the lifetime of the process.

    Conversations are created on first reference and never evicted.
    """

    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}
        self._lock = threading.Lock()

    def get_or_create(self, conversation_id: str | None = None) -> Conversation:
        """Get a conversation by ID, creating it if it does not exist yet.

        Args:
            conversation_id: The conversation ID; a new one is generated when
                             empty or None

        Returns:
            The existing or newly created Conversation
        """
        if not conversation_id:
            conversation_id = Conversation.generate_id()

        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                conversation = Conversation(conversation_id)
                self._conversations[conversation_id] = conversation
                logger.debug(f"Created conversation {conversation_id}")

        return conversation

    def get(self, conversation_id: str) -> Conversation | None:
        """Get a conversation by ID, or None if unknown."""
        with self._lock:
            return self._conversations.get(conversation_id)
