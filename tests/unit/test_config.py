"""Unit tests for configuration loading from YAML and the environment."""

from pathlib import Path

import pytest

from agent_server.config import (
    DEFAULT_SYSTEM_PROMPT,
    AgentServerSettings,
    CapabilitySourceConfig,
)

CONFIG_YAML = """
port: 9090
max_iterations: 10
ollama:
  host: http://ollama:11434
  model: qwen2.5:7b
mcp_servers:
  - name: filesystem
    command: agent-server-mcp
    args: ["--allow-root", "/tmp"]
  - name: disabled-server
    command: some-server
    enabled: false
rag:
  top_k: 5
  documents_dir: docs/knowledge
"""


@pytest.fixture
def config_file(tmp_path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


class TestFromYaml:
    """Tests for AgentServerSettings.from_yaml."""

    def test_loads_nested_sections(self, config_file):
        settings = AgentServerSettings.from_yaml(config_file)

        assert settings.port == 9090
        assert settings.max_iterations == 10
        assert settings.ollama.host == "http://ollama:11434"
        assert settings.ollama.model == "qwen2.5:7b"
        assert settings.rag.top_k == 5
        # Untouched fields keep their defaults
        assert settings.rag.chunk_size == 500
        assert settings.ollama.system_prompt == DEFAULT_SYSTEM_PROMPT

    def test_loads_mcp_servers(self, config_file):
        settings = AgentServerSettings.from_yaml(config_file)

        assert len(settings.mcp_servers) == 2
        first = settings.mcp_servers[0]
        assert isinstance(first, CapabilitySourceConfig)
        assert first.name == "filesystem"
        assert first.command == "agent-server-mcp"
        assert first.args == ["--allow-root", "/tmp"]
        assert first.transport == "stdio"
        assert first.enabled is True
        assert settings.mcp_servers[1].enabled is False

    def test_overrides_take_precedence(self, config_file):
        settings = AgentServerSettings.from_yaml(config_file, port=7000)
        assert settings.port == 7000

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        settings = AgentServerSettings.from_yaml(path)

        assert settings.port == 8080

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a mapping"):
            AgentServerSettings.from_yaml(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AgentServerSettings.from_yaml(tmp_path / "missing.yaml")


class TestEnvironment:
    """Tests for environment variable overrides."""

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("AGENT_PORT", "9000")
        monkeypatch.setenv("AGENT_LOG_LEVEL", "DEBUG")

        settings = AgentServerSettings()

        assert settings.port == 9000
        assert settings.log_level == "DEBUG"

    def test_nested_env(self, monkeypatch):
        monkeypatch.setenv("AGENT_OLLAMA__MODEL", "mistral:latest")
        monkeypatch.setenv("AGENT_RAG__TOP_K", "7")

        settings = AgentServerSettings()

        assert settings.ollama.model == "mistral:latest"
        assert settings.rag.top_k == 7


def test_resolved_paths(tmp_path):
    """Test that resolved path properties work correctly."""
    settings = AgentServerSettings(
        rag={"documents_dir": str(tmp_path / "docs")},
        local_tools={"root": str(tmp_path)},
    )

    assert settings.resolved_documents_dir == tmp_path / "docs"
    assert settings.resolved_tools_root == tmp_path.resolve()
