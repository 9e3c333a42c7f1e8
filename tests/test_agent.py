"""Tests for the ADK agent wiring and its prompt."""

from datetime import date

import pytest

from agent.prompt import get_transport_advisor_prompt


def test_prompt_injects_today_and_names_every_tool() -> None:
    """Given today's date, when building the prompt, then it is grounded and lists the tools."""
    prompt = get_transport_advisor_prompt()

    assert date.today().isoformat() in prompt
    for tool_name in ("search_locations", "search_connections", "get_stationboard"):
        assert tool_name in prompt


def test_create_agent_uses_configured_model(monkeypatch) -> None:
    """Given AGENT_MODEL, when creating the agent, then the LiteLlm model follows it."""
    pytest.importorskip("google.adk")
    from agent.transport_agent import AGENT_NAME, create_agent

    monkeypatch.setenv("AGENT_MODEL", "openrouter/openai/gpt-4o-mini")

    agent = create_agent()

    assert agent.name == AGENT_NAME
    assert agent.model.model == "openrouter/openai/gpt-4o-mini"
    assert "search_connections" in agent.instruction
    assert len(agent.tools) == 1
