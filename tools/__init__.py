# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP clients and the Jenkins
#   adapter in core/.  The server module:
#     1. Calls a JenkinsClient method from core/
#     2. Wraps it in a FastMCP tool decorator
#     3. Turns the result into text (pretty JSON, log text, trigger summary)
#     4. Converts Jenkins failures into MCP tool errors
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs or talk HTTP (that's core/)
#   - They do NOT decide what to call next (that's the assistant's job)
# =============================================================================
