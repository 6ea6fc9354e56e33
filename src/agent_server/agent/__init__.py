"""Tool-augmented conversation orchestration.

This package provides the Agent that drives the turn loop between the user,
the model and the registered tools, together with its result types and
errors.
"""

from agent_server.agent.errors import (
    AgentError,
    MaxIterationsError,
    ModelUnavailableError,
    ToolNotFoundError,
)
from agent_server.agent.orchestrator import Agent
from agent_server.agent.types import ChatResult, ToolCallRecord

__all__ = [
    "Agent",
    "AgentError",
    "ChatResult",
    "MaxIterationsError",
    "ModelUnavailableError",
    "ToolCallRecord",
    "ToolNotFoundError",
]
