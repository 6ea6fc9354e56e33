"""Integration tests running the builtin MCP server as a real subprocess.

The capability source launches ``python -m agent_server.mcpserver`` over
stdio, discovers its tools and calls them through the agent.
"""

import json
import sys
from unittest.mock import AsyncMock

import pytest

from agent_server.agent import Agent
from agent_server.capabilities import CapabilitySource, CapabilitySourceError
from agent_server.config import CapabilitySourceConfig


def builtin_server_config(root, name: str = "files") -> CapabilitySourceConfig:
    return CapabilitySourceConfig(
        name=name,
        command=sys.executable,
        args=["-m", "agent_server.mcpserver", "--allow-root", str(root)],
        timeout=30.0,
    )


@pytest.mark.asyncio
async def test_source_discovers_and_calls_tools(tmp_path):
    (tmp_path / "hello.txt").write_text("hello over stdio", encoding="utf-8")
    source = CapabilitySource(builtin_server_config(tmp_path))

    try:
        tools = await source.connect()
        assert {t.name for t in tools} == {"read_file", "write_file", "list_directory"}
        assert source.connected is True

        assert await source.call_tool("read_file", {"path": "hello.txt"}) == "hello over stdio"

        listing = json.loads(await source.call_tool("list_directory", {"path": "."}))
        assert {"name": "hello.txt", "type": "file"} in listing["entries"]

        with pytest.raises(CapabilitySourceError, match="outside allowed root"):
            await source.call_tool("read_file", {"path": "../../etc/passwd"})
    finally:
        await source.close()

    assert source.connected is False


@pytest.mark.asyncio
async def test_agent_routes_tool_calls_to_source(test_settings, tmp_path):
    (tmp_path / "notes.md").write_text("remote notes", encoding="utf-8")
    test_settings.local_tools.enabled = False
    test_settings.mcp_servers = [builtin_server_config(tmp_path, name="remote-files")]

    ollama_client = AsyncMock()
    ollama_client.chat.side_effect = [
        {
            "message": {
                "role": "assistant",
                "content": "",
                "tool_calls": [
                    {"function": {"name": "read_file", "arguments": {"path": "notes.md"}}}
                ],
            }
        },
        {"message": {"role": "assistant", "content": "The notes say: remote notes"}},
    ]
    agent = Agent(settings=test_settings, ollama_client=ollama_client)

    results = await agent.start()
    try:
        assert [(r.name, r.status, r.tool_count) for r in results] == [
            ("remote-files", "connected", 3)
        ]
        assert {t["source"] for t in agent.list_tools()} == {"mcp:remote-files"}

        result = await agent.chat("What do the notes say?")

        assert result.response == "The notes say: remote notes"
        assert result.tool_calls[0].result == "remote notes"
    finally:
        await agent.stop()
