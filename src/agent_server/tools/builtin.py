"""Builtin filesystem tools.

The same three tools are registered in-process by the agent and served over
MCP stdio by ``agent_server.mcpserver``. Every path is resolved relative to a
root directory and rejected when it points outside of it.
"""

import json
import logging
from pathlib import Path

from agent_server.tools.types import LocalToolExecutor, ToolInfo

logger = logging.getLogger(__name__)

LOCAL_SOURCE = "local"


class FileTools:
    """Read, write and list files below a root directory.

    Attributes:
        root: The directory every path is resolved against
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize the file tools.

        Args:
            root: The allowed root directory

        Raises:
            FileNotFoundError: If the root directory does not exist
        """
        self.root = Path(root).resolve()
        if not self.root.is_dir():
            raise FileNotFoundError(f"Allowed root directory not found: {self.root}")

    def _resolve(self, path: str) -> Path:
        # Absolute paths are taken as relative to the root
        target = (self.root / path.lstrip("/\\")).resolve()
        if not target.is_relative_to(self.root):
            raise PermissionError("Access denied: path outside allowed root")
        return target

    def read_file(self, path: str) -> str:
        """Read the content of a file."""
        logger.info(f"Tool called: read_file path={path}")
        target = self._resolve(path)
        return target.read_text(encoding="utf-8")

    def write_file(self, path: str, content: str) -> str:
        """Write content to a file, creating parent directories as needed."""
        logger.info(f"Tool called: write_file path={path} length={len(content)}")
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return f"Successfully wrote {len(content.encode('utf-8'))} bytes to {path}"

    def list_directory(self, path: str) -> str:
        """List the entries of a directory as JSON."""
        logger.info(f"Tool called: list_directory path={path}")
        target = self._resolve(path)
        entries = [
            {"name": entry.name, "type": "directory" if entry.is_dir() else "file"}
            for entry in sorted(target.iterdir(), key=lambda p: p.name)
        ]
        return json.dumps({"entries": entries}, ensure_ascii=False)

    def tool_infos(self) -> list[ToolInfo]:
        """Describe the file tools for registration in a ToolRegistry."""

        def path_schema(description: str) -> dict:
            return {
                "type": "object",
                "properties": {"path": {"type": "string", "description": description}},
                "required": ["path"],
            }

        return [
            ToolInfo(
                name="read_file",
                source=LOCAL_SOURCE,
                description="Read the content of a file",
                input_schema=path_schema("File path relative to the allowed root"),
                executor=LocalToolExecutor(self.read_file),
            ),
            ToolInfo(
                name="write_file",
                source=LOCAL_SOURCE,
                description="Write content to a file",
                input_schema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": "File path relative to the allowed root",
                        },
                        "content": {
                            "type": "string",
                            "description": "Content to write to the file",
                        },
                    },
                    "required": ["path", "content"],
                },
                executor=LocalToolExecutor(self.write_file),
            ),
            ToolInfo(
                name="list_directory",
                source=LOCAL_SOURCE,
                description="List the entries of a directory",
                input_schema=path_schema("Directory path relative to the allowed root"),
                executor=LocalToolExecutor(self.list_directory),
            ),
        ]
