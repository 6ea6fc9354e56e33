"""Tool listing endpoint."""

from fastapi import APIRouter, Depends

from agent_server.agent import Agent
from agent_server.dependencies import get_agent
from agent_server.models.tools import ToolListItem, ToolListResponse

router = APIRouter(prefix="/api/v1", tags=["tools"])


@router.get("/tools", response_model=ToolListResponse)
async def list_tools(agent: Agent = Depends(get_agent)) -> ToolListResponse:
    """List every registered tool with its description and source."""
    tools = [ToolListItem(**tool) for tool in agent.list_tools()]
    return ToolListResponse(tools=tools, count=len(tools))
