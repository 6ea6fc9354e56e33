"""Name-keyed registry of tools merged from every capability source."""

import logging
import threading

from agent_server.tools.types import ToolInfo

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Directory mapping a tool name to its ToolInfo.

    Registering a name that already exists replaces the previous entry, so the
    last registration wins. Writes are serialized and publish a new mapping,
    which lets lookups read without taking the lock.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolInfo] = {}
        self._write_lock = threading.Lock()

    def register(self, tool: ToolInfo) -> None:
        """Register a tool, replacing any tool with the same name.

        Args:
            tool: The tool to register
        """
        with self._write_lock:
            previous = self._tools.get(tool.name)
            tools = dict(self._tools)
            tools[tool.name] = tool
            self._tools = tools

        if previous is not None and previous.source != tool.source:
            logger.warning(
                f"Tool {tool.name} from {previous.source} replaced by {tool.source}"
            )
        logger.debug(f"Registered tool {tool.name} from {tool.source}")

    def get(self, name: str) -> ToolInfo | None:
        """Get a tool by name, or None if it is not registered."""
        return self._tools.get(name)

    def list(self) -> list[ToolInfo]:
        """List all registered tools in no particular order."""
        return list(self._tools.values())

    def count(self) -> int:
        """Number of unique tool names registered."""
        return len(self._tools)
