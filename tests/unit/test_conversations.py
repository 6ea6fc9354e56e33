"""Unit tests for conversation history and the conversation store."""

from agent_server.conversations import (
    AssistantMessage,
    Conversation,
    ConversationStore,
    SystemMessage,
    ToolMessage,
    UserMessage,
    to_ollama_messages,
)


class TestMessageTypes:
    """Tests for the message dataclasses."""

    def test_roles_are_pinned(self):
        assert UserMessage(role="assistant", content="x").role == "user"
        assert SystemMessage(role="user", content="x").role == "system"
        assert AssistantMessage(role="user", content="x").role == "assistant"
        assert ToolMessage(role="user", content="x").role == "tool"

    def test_assistant_defaults(self):
        msg = AssistantMessage(content="hi")
        assert msg.tool_calls is None
        assert msg.model == ""


class TestConversation:
    """Tests for the Conversation class."""

    def test_add_message_sets_timestamp(self):
        conversation = Conversation("c1")

        conversation.add_message(UserMessage(content="hello"))

        message = conversation.get_messages()[0]
        assert message.timestamp.endswith("Z")

    def test_add_message_keeps_existing_timestamp(self):
        conversation = Conversation("c1")

        conversation.add_message(
            UserMessage(content="hello", timestamp="2024-01-01T00:00:00Z")
        )

        assert conversation.get_messages()[0].timestamp == "2024-01-01T00:00:00Z"

    def test_messages_keep_insertion_order(self):
        conversation = Conversation("c1")
        conversation.add_message(UserMessage(content="one"))
        conversation.add_message(AssistantMessage(content="two"))
        conversation.add_message(ToolMessage(tool_name="t", content="three"))

        contents = [m.content for m in conversation.get_messages()]

        assert contents == ["one", "two", "three"]
        assert conversation.message_count == 3

    def test_get_messages_returns_snapshot(self):
        conversation = Conversation("c1")
        conversation.add_message(UserMessage(content="one"))

        snapshot = conversation.get_messages()
        snapshot.append(UserMessage(content="not stored"))

        assert conversation.message_count == 1

    def test_generate_id_is_unique(self):
        assert Conversation.generate_id() != Conversation.generate_id()


class TestToOllamaMessages:
    """Tests for converting history to the Ollama message format."""

    def test_plain_messages(self):
        messages = [UserMessage(content="hi"), AssistantMessage(content="hello")]

        result = to_ollama_messages(messages)

        assert result == [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]

    def test_tool_calls_and_tool_name(self):
        calls = [{"function": {"name": "read_file", "arguments": {"path": "a"}}}]
        messages = [
            AssistantMessage(content="", tool_calls=calls),
            ToolMessage(tool_name="read_file", content="data"),
        ]

        result = to_ollama_messages(messages)

        assert result[0]["tool_calls"] == calls
        assert result[1] == {"role": "tool", "content": "data", "tool_name": "read_file"}


class TestConversationStore:
    """Tests for the ConversationStore."""

    def test_get_or_create_generates_id(self):
        store = ConversationStore()

        conversation = store.get_or_create(None)

        assert conversation.conversation_id
        assert store.get(conversation.conversation_id) is conversation

    def test_get_or_create_empty_string_generates_id(self):
        store = ConversationStore()

        conversation = store.get_or_create("")

        assert conversation.conversation_id != ""

    def test_get_or_create_reuses_conversation(self):
        store = ConversationStore()

        first = store.get_or_create("abc")
        second = store.get_or_create("abc")

        assert first is second
        assert store.get("abc") is first

    def test_unknown_id_is_created_with_that_id(self):
        store = ConversationStore()

        conversation = store.get_or_create("my-own-id")

        assert conversation.conversation_id == "my-own-id"

    def test_get_unknown_returns_none(self):
        assert ConversationStore().get("missing") is None
