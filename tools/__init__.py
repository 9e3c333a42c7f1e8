# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP protocol and the core
#   handlers.  mcp_server.py:
#     1. Declares each tool's input schema (types, enums, numeric bounds)
#     2. Awaits the matching coroutine in core/handlers.py
#     3. Maps the returned ToolResult onto MCP: text on success, ToolError
#        (isError=true) on failure
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk to transport.opendata.ch (core/transport_api.py does)
#   - They do NOT format text (core/formatters.py does)
#   - They do NOT know about Google ADK (they're agent-agnostic)
# =============================================================================
