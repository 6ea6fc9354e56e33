"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that replace the
Ollama client with a mock before the app's lifespan creates it.
"""

from unittest.mock import AsyncMock, patch

import pytest


def embed_by_keyword(model: str, text: str) -> list[float]:
    """Deterministic fake embedding: one dimension per keyword."""
    keywords = ["python", "rust", "ollama"]
    return [float(text.lower().count(k)) for k in keywords] + [0.1]


@pytest.fixture(autouse=True)
def mock_ollama_client():
    """Mock OllamaClient for all integration tests.

    This fixture patches the OllamaClient class before the app is created,
    ensuring the lifespan uses our mock instead of creating a real client.
    """
    with patch("agent_server.app.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.host = "http://localhost:11434"
        mock_instance.check_connection.return_value = True
        mock_instance.chat.return_value = {
            "model": "llama3.2:latest",
            "message": {"role": "assistant", "content": "Hello!"},
            "done": True,
        }
        mock_instance.embed.side_effect = embed_by_keyword

        # Return the mock instance when OllamaClient is instantiated
        mock_client_class.return_value = mock_instance

        yield mock_instance
