"""Configuration module for agent-server using pydantic-settings."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = """You are an efficient AI assistant:
- Understand the user's request before acting and avoid repeating tool calls
- Check the conversation history first and reuse information already gathered
- Only call tools when they are actually needed, never explore blindly
- Batch independent tool calls into a single turn
- Give a clear, accurate final answer and briefly mention which tools you used"""


class OllamaSettings(BaseModel):
    """Settings for the Ollama model service."""

    host: str = "http://localhost:11434"
    model: str = "llama3.2:latest"
    timeout: float = 120.0
    max_retries: int = 3
    system_prompt: str = DEFAULT_SYSTEM_PROMPT


class CapabilitySourceConfig(BaseModel):
    """One external MCP server launched as a subprocess."""

    name: str
    command: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    transport: str = "stdio"
    enabled: bool = True
    timeout: float = 60.0


class RAGSettings(BaseModel):
    """Settings for the retrieval engine."""

    embed_model: str = "nomic-embed-text:latest"
    chunk_size: int = 500
    chunk_overlap: int = 50
    top_k: int = 3
    documents_dir: str = "docs/rag"
    load_on_startup: bool = False


class LocalToolsSettings(BaseModel):
    """Settings for the builtin filesystem tools."""

    enabled: bool = True
    root: str = "."


class AgentServerSettings(BaseSettings):
    """Main configuration settings for agent-server.

    All settings can be overridden via environment variables with the AGENT_ prefix.
    Nested sections use a double underscore, e.g. AGENT_OLLAMA__MODEL overrides
    ollama.model and AGENT_RAG__TOP_K overrides rag.top_k.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    # Turn loop
    max_iterations: int = 100
    chat_timeout: float | None = None

    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    mcp_servers: list[CapabilitySourceConfig] = Field(default_factory=list)
    rag: RAGSettings = Field(default_factory=RAGSettings)
    local_tools: LocalToolsSettings = Field(default_factory=LocalToolsSettings)

    model_config = SettingsConfigDict(env_prefix="AGENT_", env_nested_delimiter="__")

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "AgentServerSettings":
        """Load settings from a YAML file.

        Values from the file take precedence over environment variables, and
        explicit keyword overrides take precedence over both.

        Args:
            path: Path to the YAML configuration file
            **overrides: Top-level settings to override

        Returns:
            AgentServerSettings: The loaded settings

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not contain a mapping
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        data.update(overrides)
        return cls(**data)

    @property
    def resolved_documents_dir(self) -> Path:
        """Get the full path to the RAG documents directory."""
        return Path(self.rag.documents_dir)

    @property
    def resolved_tools_root(self) -> Path:
        """Get the full path to the builtin tools root directory."""
        return Path(self.local_tools.root).resolve()
