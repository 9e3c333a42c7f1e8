# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic behind the Swiss transport tools:
# talking to transport.opendata.ch, decoding its JSON, and rendering text.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any orchestration
#   framework.  The only third-party import is httpx (for the one outbound
#   GET each handler makes).  Every handler returns a plain ToolResult, so
#   the MCP layer in tools/ is just wiring.
# =============================================================================
