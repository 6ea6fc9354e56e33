"""Pydantic models for chat API requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for POST /api/v1/chat and POST /api/v1/chat/rag."""

    message: str = Field(min_length=1, description="The user message to send.")
    conversation_id: str | None = Field(
        default=None,
        description="Conversation to continue. A new conversation is created when omitted or unknown.",
    )
    model: str | None = Field(
        default=None,
        description="Model to use for this request instead of the configured default.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"message": "List the files in the current directory"},
                {
                    "message": "And what is in README.md?",
                    "conversation_id": "0b7c6f1e-3f0a-4a55-9d0e-1b2f3c4d5e6f",
                    "model": "llama3.2:latest",
                },
            ]
        }
    )


class ToolCallResponse(BaseModel):
    """A tool call executed while answering a chat request."""

    tool: str = Field(description="Name of the tool")
    arguments: dict[str, Any] = Field(description="Arguments supplied by the model")
    result: str = Field(description="Tool result or error text")

    model_config = ConfigDict(from_attributes=True)


class ChatResponse(BaseModel):
    """Response body for the chat endpoints."""

    response: str = Field(description="The model's final answer")
    tool_calls: list[ToolCallResponse] | None = Field(
        default=None, description="Tool calls executed for this request, in order"
    )
    conversation_id: str = Field(description="Conversation identifier")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "response": "The directory contains README.md and src/.",
                "tool_calls": [
                    {
                        "tool": "list_directory",
                        "arguments": {"path": "."},
                        "result": '{"entries": [{"name": "README.md", "type": "file"}]}',
                    }
                ],
                "conversation_id": "0b7c6f1e-3f0a-4a55-9d0e-1b2f3c4d5e6f",
            }
        }
    )
