"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and the agent.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from agent_server.agent import Agent
from agent_server.config import AgentServerSettings


@lru_cache
def get_settings() -> AgentServerSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the AGENT_ prefix.

    Returns:
        AgentServerSettings: The application configuration settings.
    """
    return AgentServerSettings()


def get_agent(request: Request) -> Agent:
    """Get the Agent created during application startup.

    The agent owns the conversation store, tool registry and retrieval
    engine, so one instance is shared by every request.

    Args:
        request: The FastAPI request object.

    Returns:
        Agent: The application's agent.

    Raises:
        HTTPException: If the agent is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "agent"):
        raise HTTPException(
            status_code=503,
            detail="Agent not initialized",
        )
    return request.app.state.agent
