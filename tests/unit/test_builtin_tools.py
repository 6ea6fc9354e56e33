"""Unit tests for the builtin filesystem tools."""

import json

import pytest

from agent_server.tools import FileTools
from agent_server.tools.builtin import LOCAL_SOURCE


@pytest.fixture
def file_tools(tmp_path):
    (tmp_path / "notes.txt").write_text("hello notes", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    return FileTools(tmp_path)


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileTools(tmp_path / "missing")


def test_read_file(file_tools):
    assert file_tools.read_file("notes.txt") == "hello notes"


def test_absolute_path_is_relative_to_root(file_tools):
    assert file_tools.read_file("/notes.txt") == "hello notes"


def test_read_missing_file_raises(file_tools):
    with pytest.raises(FileNotFoundError):
        file_tools.read_file("missing.txt")


def test_path_outside_root_is_denied(file_tools):
    with pytest.raises(PermissionError, match="outside allowed root"):
        file_tools.read_file("../../etc/passwd")


def test_write_file_creates_parents(file_tools, tmp_path):
    result = file_tools.write_file("deep/dir/out.txt", "数据")

    assert (tmp_path / "deep" / "dir" / "out.txt").read_text(encoding="utf-8") == "数据"
    assert result == "Successfully wrote 6 bytes to deep/dir/out.txt"


def test_write_outside_root_is_denied(file_tools):
    with pytest.raises(PermissionError):
        file_tools.write_file("../escape.txt", "x")


def test_list_directory(file_tools):
    result = json.loads(file_tools.list_directory("."))

    assert result == {
        "entries": [
            {"name": "notes.txt", "type": "file"},
            {"name": "sub", "type": "directory"},
        ]
    }


def test_tool_infos(file_tools):
    tools = {tool.name: tool for tool in file_tools.tool_infos()}

    assert set(tools) == {"read_file", "write_file", "list_directory"}
    assert all(tool.source == LOCAL_SOURCE for tool in tools.values())
    assert tools["write_file"].input_schema["required"] == ["path", "content"]


@pytest.mark.asyncio
async def test_tool_infos_execute(file_tools):
    tools = {tool.name: tool for tool in file_tools.tool_infos()}

    result = await tools["read_file"].executor.execute({"path": "notes.txt"})

    assert result == "hello notes"
