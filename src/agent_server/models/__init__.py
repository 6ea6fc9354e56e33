"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from agent_server.models.chat import ChatRequest, ChatResponse, ToolCallResponse
from agent_server.models.health import HealthResponse
from agent_server.models.rag import (
    AddDocumentRequest,
    DocumentCountResponse,
    ImportFileResult,
    ImportRequest,
    ImportResponse,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
)
from agent_server.models.tools import ToolListItem, ToolListResponse

__all__ = [
    "AddDocumentRequest",
    "ChatRequest",
    "ChatResponse",
    "DocumentCountResponse",
    "HealthResponse",
    "ImportFileResult",
    "ImportRequest",
    "ImportResponse",
    "SearchRequest",
    "SearchResponse",
    "SearchResultItem",
    "ToolCallResponse",
    "ToolListItem",
    "ToolListResponse",
]
