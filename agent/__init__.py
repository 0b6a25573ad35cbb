# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK assistant configuration.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer is an optional interactive front end.  It:
#     1. Receives a question ("why did the last deploy fail?")
#     2. Decides which Jenkins tools to call (via MCP)
#     3. Reads logs, parameters and queue state through those tools
#     4. Answers in plain language
#
#   It never imports core/ directly.  Everything it knows about Jenkins
#   arrives through the MCP server in tools/, exactly as it would for any
#   other MCP client (Claude Desktop, an IDE, ...).
# =============================================================================
