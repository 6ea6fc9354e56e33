"""External capability sources reached over the Model Context Protocol.

Each configured source is an MCP server subprocess whose tools are exposed to
the turn loop through the tool registry.
"""

from agent_server.capabilities.manager import CapabilityManager, SourceStartResult
from agent_server.capabilities.source import CapabilitySource, CapabilitySourceError

__all__ = [
    "CapabilityManager",
    "CapabilitySource",
    "CapabilitySourceError",
    "SourceStartResult",
]
