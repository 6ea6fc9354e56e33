"""Type definitions for tools.

A tool is bound to exactly one of two executor variants, chosen when the tool
is registered: an in-process callable or a remote call through a capability
source.
"""

import asyncio
import inspect
import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from agent_server.capabilities.source import CapabilitySource


def _stringify(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, default=str)


@dataclass(frozen=True)
class LocalToolExecutor:
    """Runs an in-process Python callable.

    Sync callables run in a worker thread so they never block the event loop.
    Non-string return values are serialized to JSON.
    """

    func: Callable[..., Any]

    async def execute(self, arguments: dict[str, Any]) -> str:
        if inspect.iscoroutinefunction(self.func):
            result = await self.func(**arguments)
        else:
            result = await asyncio.to_thread(self.func, **arguments)
        return _stringify(result)


@dataclass(frozen=True)
class RemoteToolExecutor:
    """Invokes a named tool on a connected capability source."""

    source: "CapabilitySource"
    tool_name: str

    async def execute(self, arguments: dict[str, Any]) -> str:
        return await self.source.call_tool(self.tool_name, arguments)


ToolExecutor = LocalToolExecutor | RemoteToolExecutor


@dataclass
class ToolInfo:
    """A callable tool as seen by the turn loop.

    Attributes:
        name: Unique key within the registry
        source: Origin tag, "local" or "mcp:<source name>"
        description: Human-readable description shown to the model
        input_schema: Declared JSON-Schema-like parameter schema
        executor: The bound executor
    """

    name: str
    source: str
    executor: ToolExecutor
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=dict)
