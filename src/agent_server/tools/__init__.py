"""Tool registry, schema conversion and builtin tools.

This package provides the tool abstraction shared by in-process functions and
MCP capability sources, the registry the turn loop resolves tools from, and
the conversion of declared schemas to Ollama tool descriptors.
"""

from agent_server.tools.builtin import FileTools
from agent_server.tools.registry import ToolRegistry
from agent_server.tools.schema import convert_parameters, tool_to_ollama
from agent_server.tools.types import (
    LocalToolExecutor,
    RemoteToolExecutor,
    ToolExecutor,
    ToolInfo,
)

__all__ = [
    "FileTools",
    "LocalToolExecutor",
    "RemoteToolExecutor",
    "ToolExecutor",
    "ToolInfo",
    "ToolRegistry",
    "convert_parameters",
    "tool_to_ollama",
]
