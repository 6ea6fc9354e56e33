"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agent_server import __version__
from agent_server.agent import Agent
from agent_server.config import AgentServerSettings
from agent_server.ollama import OllamaClient
from agent_server.routers import chat, health, rag, tools

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The Ollama client and the Agent are created once at startup and stored in
    app.state for reuse across all requests. MCP servers are launched by the
    agent here and terminated on shutdown, in the same task.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: AgentServerSettings = app.state.settings
    ollama_client = OllamaClient(
        host=settings.ollama.host,
        timeout=settings.ollama.timeout,
        max_retries=settings.ollama.max_retries,
    )
    app.state.ollama_client = ollama_client
    logger.info(f"Initialized Ollama client with host: {settings.ollama.host}")

    # Check initial connectivity
    connected = await ollama_client.check_connection()
    if connected:
        logger.info("Successfully connected to Ollama")
    else:
        logger.warning("Could not connect to Ollama - check if server is running")

    agent = Agent(settings=settings, ollama_client=ollama_client)
    app.state.agent = agent

    for result in await agent.start():
        if result.status == "failed":
            logger.warning(f"MCP server {result.name} unavailable: {result.reason}")

    try:
        if settings.rag.load_on_startup:
            try:
                await agent.import_documents(settings.resolved_documents_dir)
            except (FileNotFoundError, NotADirectoryError) as e:
                logger.warning(f"Skipping startup document import: {e}")

        yield
    finally:
        # Shutdown: Clean up resources
        await agent.stop()
        await ollama_client.close()
        logger.info("Ollama client closed")


def create_app(settings: AgentServerSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional AgentServerSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from agent_server.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="agent-server",
        description="FastAPI server for tool-augmented LLM conversations via Ollama and MCP",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(rag.router)
    app.include_router(tools.router)

    return app
