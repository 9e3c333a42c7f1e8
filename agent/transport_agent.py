# =============================================================================
# agent/transport_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the Google ADK agent that answers Swiss public-transport
#   questions by calling the tools published by tools/mcp_server.py.
#
# ADK + LiteLlm:
#   ADK is the agent framework (orchestration, tool calling, sessions);
#   LiteLlm lets it drive a non-Gemini model.  The default model string
#   "openrouter/openai/gpt-4o" routes through OpenRouter, and LiteLlm reads
#   OPENROUTER_API_KEY from the environment.  Override with AGENT_MODEL.
#
#   ┌──────────────────────────┐        stdio        ┌──────────────────────┐
#   │  ADK Agent (LLM)         │ ──────────────────▶ │  FastMCP server      │
#   │  prompt: agent/prompt.py │                     │  tools/mcp_server.py │
#   └──────────────────────────┘                     └──────────┬───────────┘
#                                                               │ HTTPS GET
#                                                               ▼
#                                                   transport.opendata.ch/v1
#
# MCP CONNECTION:
#   ADK spawns the tool server as a subprocess ("uv run python -m
#   tools.mcp_server") from the project root and talks to it over
#   stdin/stdout.  Tools are discovered automatically.
# =============================================================================

import os

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool.mcp_toolset import MCPToolset, StdioServerParameters

from agent.prompt import get_transport_advisor_prompt
from core.config import get_agent_model

AGENT_NAME = "swiss_transport_advisor"


def create_agent() -> Agent:
    """Create and configure the Swiss transport advisor agent.

    Returns:
        A configured Google ADK Agent wired to the FastMCP tool server.
    """
    # "uv run" makes the subprocess use the project's .venv, where fastmcp
    # and httpx are installed.
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = MCPToolset(
        connection_params=StdioServerParameters(
            command="uv",
            args=["run", "python", "-m", "tools.mcp_server"],
            cwd=project_root,
        ),
    )

    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=get_agent_model()),
        instruction=get_transport_advisor_prompt(),
        tools=[mcp_tools],
    )
