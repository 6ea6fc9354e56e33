"""Lifecycle management for all configured capability sources."""

import logging
from dataclasses import dataclass

from agent_server.capabilities.source import CapabilitySource
from agent_server.config import CapabilitySourceConfig
from agent_server.tools.types import ToolInfo

logger = logging.getLogger(__name__)


@dataclass
class SourceStartResult:
    """Outcome of starting one capability source.

    Attributes:
        name: The configured source name
        status: "connected", "skipped" or "failed"
        tool_count: Number of tools discovered
        reason: Why the source was skipped or failed
    """

    name: str
    status: str
    tool_count: int = 0
    reason: str | None = None


class CapabilityManager:
    """Starts, tracks and stops every configured capability source.

    Startup is best-effort: a source that fails to launch or connect is
    logged and left out, and the remaining sources still start.
    """

    def __init__(self, configs: list[CapabilitySourceConfig]) -> None:
        self.configs = configs
        self.sources: dict[str, CapabilitySource] = {}

    async def start(self) -> list[SourceStartResult]:
        """Start all enabled sources.

        Returns:
            list[SourceStartResult]: One result per configured source
        """
        results: list[SourceStartResult] = []

        for config in self.configs:
            if not config.enabled:
                logger.debug(f"Skipping disabled MCP server {config.name}")
                results.append(
                    SourceStartResult(name=config.name, status="skipped", reason="disabled")
                )
                continue

            source = CapabilitySource(config)
            try:
                tools = await source.connect()
            except Exception as e:
                logger.error(f"Failed to start MCP client {config.name}: {e}")
                results.append(
                    SourceStartResult(name=config.name, status="failed", reason=str(e))
                )
                continue

            self.sources[config.name] = source
            results.append(
                SourceStartResult(
                    name=config.name, status="connected", tool_count=len(tools)
                )
            )

        logger.info(f"MCP manager started with {len(self.sources)} clients")
        return results

    def get_all_tools(self) -> list[ToolInfo]:
        """Collect the tools of every connected source."""
        tools: list[ToolInfo] = []
        for source in self.sources.values():
            tools.extend(source.tool_infos())
        return tools

    async def stop(self) -> None:
        """Stop all sources. Errors are logged and never raised."""
        for name, source in list(self.sources.items()):
            try:
                await source.close()
            except Exception as e:
                logger.error(f"Failed to stop MCP client {name}: {e}")

        self.sources.clear()
        logger.info("MCP manager stopped")
