"""Pytest configuration and shared fixtures for agent-server tests.

This module provides common fixtures used across all test modules,
including test app creation and async client setup.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agent_server import create_app
from agent_server.config import (
    AgentServerSettings,
    LocalToolsSettings,
    OllamaSettings,
    RAGSettings,
)


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with an isolated temporary tools root.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        AgentServerSettings: Settings instance configured for testing.
    """
    return AgentServerSettings(
        host="127.0.0.1",
        port=8080,
        log_level="DEBUG",
        cors_origins=["*"],
        ollama=OllamaSettings(
            host="http://localhost:11434",
            model="llama3.2:latest",
            system_prompt="You are a test assistant.",
        ),
        mcp_servers=[],
        rag=RAGSettings(
            embed_model="nomic-embed-text:latest",
            chunk_size=500,
            chunk_overlap=50,
            top_k=3,
            documents_dir=str(tmp_path / "docs"),
        ),
        local_tools=LocalToolsSettings(enabled=True, root=str(tmp_path)),
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
