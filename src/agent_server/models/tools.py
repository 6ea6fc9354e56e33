"""Pydantic models for the tools API."""

from pydantic import BaseModel, Field


class ToolListItem(BaseModel):
    """A registered tool."""

    name: str = Field(description="Tool name")
    description: str = Field(description="Tool description")
    source: str = Field(description="Origin of the tool, 'local' or 'mcp:<server>'")


class ToolListResponse(BaseModel):
    """Response body for GET /api/v1/tools."""

    tools: list[ToolListItem] = Field(description="All registered tools")
    count: int = Field(description="Number of registered tools")
