# =============================================================================
# agent/jenkins_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Configures and creates the Google ADK agent: the coordinator that
#   receives a question, calls the Jenkins MCP tools, and answers.
#
# ADK + LiteLlm:
#   ADK is the agent framework (orchestration, tool calling, sessions).
#   The LLM is reached through LiteLlm, so any provider LiteLlm knows can be
#   used.  The default routes through OpenRouter; set JENKINS_AGENT_MODEL to
#   switch, e.g. "openrouter/anthropic/claude-3.5-sonnet".
#
#   ┌────────────────────────┐   stdio   ┌───────────────────────┐   HTTPS   ┌─────────┐
#   │  ADK Agent (LiteLlm)   │──────────▶│  tools/mcp_server.py  │──────────▶│ Jenkins │
#   └────────────────────────┘    MCP    └───────────────────────┘   REST    └─────────┘
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess and talks to it over
#   stdin/stdout.  The MCP stdio client only forwards a handful of
#   variables (PATH, HOME, ...) by default, so we pass our own environment
#   through explicitly, otherwise JENKINS_URL / JENKINS_TOKEN never reach
#   the server.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_jenkins_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def create_server_parameters() -> StdioServerParameters:
    """How to spawn the Jenkins tool server: current interpreter, project root, our env."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_mcp_toolset() -> MCPToolset:
    """Connection to the Jenkins tool server over stdio."""
    return MCPToolset(connection_params=create_server_parameters())


def create_agent() -> Agent:
    """Create and configure the Jenkins assistant agent.

    Returns:
        A configured Google ADK Agent instance.
    """
    model = os.environ.get("JENKINS_AGENT_MODEL", DEFAULT_MODEL)

    return Agent(
        name="jenkins_assistant",
        model=LiteLlm(model=model),
        instruction=get_jenkins_assistant_prompt(),
        tools=[create_mcp_toolset()],
    )
