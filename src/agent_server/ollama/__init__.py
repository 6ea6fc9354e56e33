"""Ollama client wrapper and integration layer.

This package provides the async client wrapper for communicating with the
Ollama API: chat with tool descriptors, embeddings and connectivity checks.
"""

from agent_server.ollama.client import OllamaClient

__all__ = ["OllamaClient"]
