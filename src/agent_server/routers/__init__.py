"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific domain (health, chat, rag, tools).
"""

from agent_server.routers import chat, health, rag, tools

__all__ = [
    "chat",
    "health",
    "rag",
    "tools",
]
