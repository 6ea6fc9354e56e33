"""CLI entry point for agent-server.

This module provides the command-line interface for starting the agent-server.
It can be invoked as `agent-server` (via the script entry point) or
`python -m agent_server`.
"""

import argparse
import logging
import sys

import uvicorn

from agent_server import __version__, create_app
from agent_server.config import AgentServerSettings


def main() -> None:
    """Main entry point for the agent-server CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="agent-server",
        description="FastAPI server for tool-augmented LLM conversations via Ollama",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"agent-server {__version__}",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file (values override AGENT_* environment variables)",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via AGENT_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8080, can be set via AGENT_PORT)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via AGENT_LOG_LEVEL)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override the config file and environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    if args.config:
        settings = AgentServerSettings.from_yaml(args.config, **settings_kwargs)
    else:
        settings = AgentServerSettings(**settings_kwargs)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Create the FastAPI app
    app = create_app(settings=settings)

    # Start uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main())
