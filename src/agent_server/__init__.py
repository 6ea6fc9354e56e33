"""agent-server: FastAPI server for tool-augmented LLM conversations via Ollama.

This package runs a turn loop that lets an Ollama model call builtin tools and
tools served by MCP subprocesses, with optional retrieval-augmented context.
"""

__version__ = "0.1.0"

from agent_server.app import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
