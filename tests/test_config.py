"""Tests for environment-driven settings."""

import pytest

from core.config import DEFAULT_AGENT_MODEL, ServerSettings, get_agent_model


def test_defaults_use_stdio() -> None:
    """Given an empty environment, when loading settings, then stdio mode with defaults."""
    settings = ServerSettings.from_env({})

    assert settings == ServerSettings()
    assert settings.use_http is False
    assert settings.host == "0.0.0.0"
    assert settings.mcp_path == "/mcp"
    assert settings.log_level == "INFO"


def test_port_switches_to_http() -> None:
    """Given PORT and friends, when loading settings, then HTTP mode is configured."""
    settings = ServerSettings.from_env(
        {"PORT": "8080", "HOST": "127.0.0.1", "MCP_PATH": "/api/mcp", "LOG_LEVEL": "debug"}
    )

    assert settings.use_http is True
    assert settings.port == 8080
    assert settings.host == "127.0.0.1"
    assert settings.mcp_path == "/api/mcp"
    assert settings.log_level == "DEBUG"


def test_blank_port_is_unset() -> None:
    """Given an empty PORT, when loading settings, then stdio mode is kept."""
    assert ServerSettings.from_env({"PORT": "  "}).port is None


def test_invalid_port_raises() -> None:
    """Given a non-numeric PORT, when loading settings, then ValueError names the variable."""
    with pytest.raises(ValueError, match="PORT"):
        ServerSettings.from_env({"PORT": "eighty"})


def test_agent_model_default_and_override() -> None:
    """Given AGENT_MODEL set or not, when reading the model, then override wins."""
    assert get_agent_model({}) == DEFAULT_AGENT_MODEL
    assert get_agent_model({"AGENT_MODEL": "openrouter/openai/gpt-4o-mini"}) == "openrouter/openai/gpt-4o-mini"
