# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines ALL MCP tools the assistant can call.  Each tool is a thin
#   wrapper around a JenkinsClient method (core/client.py): it logs the
#   call, turns the result into text, and converts Jenkins failures into
#   MCP tool errors.
#
# HOW IT WORKS (the flow):
#   1. The assistant decides it needs something from Jenkins
#   2. It calls a tool by name via MCP (e.g., "jenkins_get_console_output")
#   3. FastMCP routes the call to the matching function below
#   4. The function calls the client, formats the result, and returns text
#
# TOOL NAMING CONVENTIONS:
#   - jenkins_get_*     → read-only (safe to call repeatedly)
#   - jenkins_build*    → WRITE: each call queues a new build
#   - jenkins_rebuild   → WRITE: reads an old build, queues a new one
#
# FAILURES:
#   Any non-2xx from Jenkins becomes a ToolError whose message carries the
#   status code and the first 500 characters of the response body.  MCP
#   flags the result as an error; nothing is retried.
#
# RUNNING THIS SERVER:
#     a) Standalone:  python -m tools.mcp_server   (or: jenkins-mcp)
#     b) Spawned by the assistant over stdio (agent/jenkins_agent.py)
# =============================================================================

import asyncio
import json
import logging
import os
import sys
from contextlib import contextmanager
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from core.client import DEFAULT_BUILD, JenkinsClient
from core.config import JenkinsConfig
from core.models import JenkinsError

SERVER_NAME = "jenkins"
NO_PARAMETERS_MESSAGE = "This job has no parameters defined."

logger = logging.getLogger("jenkins_mcp")

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT.
# Anything else printed to stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status/progress messages
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

# Responses can be whole build logs; only the head goes to the log.
_LOG_PREVIEW_CHARS = 200


def _resolve_log_level(name: str) -> int:
    """Map a level name to its number; unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    logger.warning(f"{_YELLOW}Unknown JENKINS_LOG_LEVEL {name!r}, using INFO{_RESET}")
    return logging.INFO


def _configure_logging() -> None:
    level_name = os.environ.get("JENKINS_LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # Resolved after basicConfig so a bad value is reported on stderr.
    logging.getLogger().setLevel(_resolve_log_level(level_name))


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the head of the tool response in GREEN, then return it."""
    preview = text[:_LOG_PREVIEW_CHARS]
    if len(text) > _LOG_PREVIEW_CHARS:
        preview += f"... ({len(text)} chars)"
    logger.info(f"{_GREEN}  ← {tool_name} response: {preview!r}{_RESET}")
    return text


@contextmanager
def _jenkins_errors(tool_name: str):
    """Re-raise core failures as ToolError so MCP marks the result as failed."""
    try:
        yield
    except JenkinsError as exc:
        _log_status(f"{tool_name} failed: {exc}")
        raise ToolError(str(exc)) from exc


def _pretty(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _compact(data) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


# =============================================================================
# Server factory
# =============================================================================
# The client (and with it the config) is built once by main() and captured by
# every tool below.  Tests build their own client around a fake opener.
#
# The tools are async and run each blocking urllib call in a worker thread
# (asyncio.to_thread), so a slow Jenkins request stalls only its own call.
# =============================================================================
def create_server(client: JenkinsClient) -> FastMCP:
    """Create a FastMCP server exposing the Jenkins tools for *client*."""

    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "Tools for a Jenkins CI/CD server. Job names use '/' for folders "
            "(e.g. 'team/backend/deploy'). Triggering a build returns a queue URL; "
            "poll jenkins_get_queue_item to learn the build number."
        ),
    )

    # =========================================================================
    # TOOL 1: jenkins_get_job_info
    # =========================================================================
    @mcp.tool()
    async def jenkins_get_job_info(job: str, tree: Optional[str] = None) -> str:
        """Get Jenkins job information including status, last build, health report.

        Args:
            job: Job name (use / for folders, e.g. folder/job-name).
            tree: Optional tree filter to narrow response fields,
                  e.g. "lastBuild[number,result],healthReport[score]".
        """
        _log_request("jenkins_get_job_info", job=job, tree=tree)
        with _jenkins_errors("jenkins_get_job_info"):
            data = await asyncio.to_thread(client.get_job_info, job, tree)
        return _log_response("jenkins_get_job_info", _pretty(data))

    # =========================================================================
    # TOOL 2: jenkins_get_build_info
    # =========================================================================
    @mcp.tool()
    async def jenkins_get_build_info(job: str, build: str = DEFAULT_BUILD, tree: Optional[str] = None) -> str:
        """Get information about a specific build (number, result, duration, parameters).

        Args:
            job: Job name (use / for folders).
            build: Build number or alias (lastBuild, lastSuccessfulBuild, lastFailedBuild).
            tree: Optional tree filter.
        """
        _log_request("jenkins_get_build_info", job=job, build=build, tree=tree)
        with _jenkins_errors("jenkins_get_build_info"):
            data = await asyncio.to_thread(client.get_build_info, job, build, tree)
        return _log_response("jenkins_get_build_info", _pretty(data))

    # =========================================================================
    # TOOL 3: jenkins_get_params
    # =========================================================================
    # An empty JSON array tells the LLM very little, so a job without
    # parameters gets an explicit sentence instead.
    # =========================================================================
    @mcp.tool()
    async def jenkins_get_params(job: str) -> str:
        """Read parameter definitions for a Jenkins job (names, types, defaults).

        Call this before jenkins_build_with_params to learn which parameters
        the job accepts and what their defaults and choices are.

        Args:
            job: Job name (use / for folders).
        """
        _log_request("jenkins_get_params", job=job)
        with _jenkins_errors("jenkins_get_params"):
            definitions = await asyncio.to_thread(client.get_param_definitions, job)

        if not definitions:
            return _log_response("jenkins_get_params", NO_PARAMETERS_MESSAGE)
        _log_status(f"Found {len(definitions)} parameter definition(s)")
        return _log_response("jenkins_get_params", _pretty(definitions))

    # =========================================================================
    # TOOL 4: jenkins_get_console_output
    # =========================================================================
    @mcp.tool()
    async def jenkins_get_console_output(job: str, build: str = DEFAULT_BUILD, tail: Optional[int] = None) -> str:
        """Read console output (build log) of a Jenkins build.

        Logs longer than 100,000 characters are cut from the front and start
        with "[... truncated ...]".

        Args:
            job: Job name (use / for folders).
            build: Build number or alias (lastBuild, lastSuccessfulBuild, etc.).
            tail: If set, return only the last N lines of output.
        """
        _log_request("jenkins_get_console_output", job=job, build=build, tail=tail)
        with _jenkins_errors("jenkins_get_console_output"):
            text = await asyncio.to_thread(client.get_console_output, job, build, tail)
        return _log_response("jenkins_get_console_output", text)

    # =========================================================================
    # TOOL 5: jenkins_build
    # =========================================================================
    @mcp.tool()
    async def jenkins_build(job: str) -> str:
        """Trigger a Jenkins build without parameters.

        Returns the queue URL of the new build request.

        Args:
            job: Job name (use / for folders).
        """
        _log_request("jenkins_build", job=job)
        with _jenkins_errors("jenkins_build"):
            triggered = await asyncio.to_thread(client.trigger_build, job)

        location = triggered.queue_url
        return _log_response(
            "jenkins_build",
            f"Build triggered successfully.\n"
            f"Queue URL: {location}\n"
            f"Poll {location}api/json to get the build number once scheduled.",
        )

    # =========================================================================
    # TOOL 6: jenkins_build_with_params
    # =========================================================================
    @mcp.tool()
    async def jenkins_build_with_params(job: str, params: dict[str, str]) -> str:
        """Trigger a Jenkins build with parameters.

        Args:
            job: Job name (use / for folders).
            params: Parameters as key-value pairs,
                    e.g. {"ENVIRONMENT": "prod", "VERSION": "1.2.3"}.
        """
        _log_request("jenkins_build_with_params", job=job, params=params)
        with _jenkins_errors("jenkins_build_with_params"):
            triggered = await asyncio.to_thread(client.trigger_build_with_params, job, params)

        return _log_response(
            "jenkins_build_with_params",
            f"Build triggered with parameters: {_compact(triggered.parameters)}\n"
            f"Queue URL: {triggered.queue_url}",
        )

    # =========================================================================
    # TOOL 7: jenkins_rebuild
    # =========================================================================
    @mcp.tool()
    async def jenkins_rebuild(job: str, build: str) -> str:
        """Rebuild a specific Jenkins build by extracting its parameters and triggering a new build.

        Args:
            job: Job name (use / for folders).
            build: Build number to rebuild.
        """
        _log_request("jenkins_rebuild", job=job, build=build)
        with _jenkins_errors("jenkins_rebuild"):
            result = await asyncio.to_thread(client.rebuild, job, build)

        _log_status(f"Extracted {len(result.parameters)} parameter(s) from #{build}")
        return _log_response(
            "jenkins_rebuild",
            f"Rebuild of #{result.source_build} triggered.\n"
            f"Extracted parameters: {_compact(result.parameters)}\n"
            f"Queue URL: {result.queue_url}",
        )

    # =========================================================================
    # TOOL 8: jenkins_get_queue_item
    # =========================================================================
    @mcp.tool()
    async def jenkins_get_queue_item(queue_id: str) -> str:
        """Check the status of a queued build to get the assigned build number.

        Once Jenkins schedules the request, the response contains an
        "executable" object with the build "number" and "url".

        Args:
            queue_id: Queue item ID (number from the queue URL).
        """
        _log_request("jenkins_get_queue_item", queue_id=queue_id)
        with _jenkins_errors("jenkins_get_queue_item"):
            data = await asyncio.to_thread(client.get_queue_item, queue_id)
        return _log_response("jenkins_get_queue_item", _pretty(data))

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    load_dotenv()
    _configure_logging()

    config = JenkinsConfig.from_env()
    logger.info(f"Starting Jenkins MCP server for {config.url or '(JENKINS_URL not set)'}")

    create_server(JenkinsClient(config)).run()


if __name__ == "__main__":
    main()
