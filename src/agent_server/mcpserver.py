"""MCP stdio server exposing the builtin filesystem tools.

Run it as `agent-server-mcp --allow-root DIR` or
`python -m agent_server.mcpserver --allow-root DIR` and point an entry of
``mcp_servers`` at that command to use it as a capability source.
"""

import argparse
import logging
import sys

from mcp.server.fastmcp import FastMCP

from agent_server.tools.builtin import FileTools

logger = logging.getLogger(__name__)


def create_server(allow_root: str) -> FastMCP:
    """Create a FastMCP server serving read_file, write_file and list_directory.

    Args:
        allow_root: Directory every tool path is resolved against

    Returns:
        FastMCP: The configured server

    Raises:
        FileNotFoundError: If the root directory does not exist
    """
    file_tools = FileTools(allow_root)
    server = FastMCP("agent-server-files")

    @server.tool(description="Read the content of a file")
    def read_file(path: str) -> str:
        return file_tools.read_file(path)

    @server.tool(description="Write content to a file")
    def write_file(path: str, content: str) -> str:
        return file_tools.write_file(path, content)

    @server.tool(description="List the entries of a directory")
    def list_directory(path: str) -> str:
        return file_tools.list_directory(path)

    logger.info(f"MCP server created with allow root {file_tools.root}")
    return server


def main() -> None:
    """Entry point for the builtin MCP server."""
    parser = argparse.ArgumentParser(
        prog="agent-server-mcp",
        description="MCP stdio server exposing filesystem tools",
    )
    parser.add_argument(
        "--allow-root",
        type=str,
        default="/tmp",
        help="Root directory the tools may access (default: /tmp)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args()

    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(level=args.log_level, stream=sys.stderr)

    server = create_server(args.allow_root)
    logger.info("Starting builtin MCP server")
    server.run(transport="stdio")


if __name__ == "__main__":
    sys.exit(main())
