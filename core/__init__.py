# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the Jenkins-facing logic of the tool server.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or any orchestration
#   framework.  Every module here is plain Python plus the standard library's
#   urllib, so it can be exercised from a REPL (or a test) without an MCP
#   client attached.
#
# The tools/ layer wraps these functions in MCP tools; the agent/ layer never
# imports from here at all.
# =============================================================================
