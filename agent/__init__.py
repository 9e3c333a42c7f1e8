# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer is an example MCP *client* of the tool server.  It:
#     1. Receives the user's question ("When is the next train to Bern?")
#     2. Decides which tool(s) to call, and with what arguments
#     3. Reads the rendered text the tools return
#     4. Answers in plain language
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the transport logic (that's in core/)
#   - It is NOT the tool implementations (that's in tools/)
# =============================================================================
