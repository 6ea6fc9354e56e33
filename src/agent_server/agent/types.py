"""Result types of the agent turn loop."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolCallRecord:
    """One executed tool call in a chat request's trace."""

    tool: str
    arguments: dict[str, Any]
    result: str


@dataclass
class ChatResult:
    """Outcome of a chat request.

    Attributes:
        response: Text of the model's final answer
        tool_calls: Ordered trace of the tool calls executed for this request
        conversation_id: The conversation the exchange was appended to
    """

    response: str
    conversation_id: str
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
