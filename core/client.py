# =============================================================================
# core/client.py  —  Jenkins REST adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns each tool operation into one authenticated HTTP request against
#   Jenkins (two for rebuild) and hands back plain Python data.  The tools/
#   layer does the text formatting; this layer only talks HTTP.
#
# ENDPOINTS USED (relative to JENKINS_URL):
#   <job-path>/api/json[?tree=...]                job status / definitions
#   <job-path>/<build>/api/json[?tree=...]        one build
#   <job-path>/<build>/consoleText                raw build log
#   <job-path>/build                    (POST)    trigger, no parameters
#   <job-path>/buildWithParameters      (POST)    trigger, form-encoded params
#   queue/item/<id>/api/json                      pending build request
#
# FAILURE MODEL:
#   _send() never raises for an HTTP status; it returns a JenkinsResponse.
#   Every public method calls raise_for_status() on it, so any non-2xx
#   becomes a JenkinsHTTPError ("Jenkins 500 Server Error: ...").  Network
#   failures (URLError, socket timeouts) are NOT caught: they propagate to
#   the caller untouched.  There are no retries anywhere.
# =============================================================================

import base64
import logging
import urllib.error
import urllib.request
from typing import Any, Optional
from urllib.parse import urlencode

from core.config import JenkinsConfig
from core.console import shape_console_output
from core.models import (
    BuildParameters,
    JenkinsResponse,
    JobParameterDefinitions,
    RebuildResult,
    TriggeredBuild,
)
from core.paths import job_path, tree_query

logger = logging.getLogger(__name__)

DEFAULT_BUILD = "lastBuild"

# Tree filters used internally.  Kept narrow so big jobs stay cheap to read.
PARAM_DEFINITIONS_TREE = (
    "property[parameterDefinitions[name,type,defaultParameterValue[value],description,choices]]"
)
BUILD_PARAMETERS_TREE = "actions[parameters[name,value]]"

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class JenkinsClient:
    """Stateless adapter over the Jenkins REST API.

    Args:
        config: Base URL, credentials and optional timeout.
        opener: Anything with urllib's ``OpenerDirector.open`` signature.
                Defaults to ``urllib.request.build_opener()``; tests pass a
                fake that records requests.
    """

    def __init__(self, config: JenkinsConfig, opener=None):
        self.config = config
        self._opener = opener or urllib.request.build_opener()

        # Built ONCE.  There is no per-call override and no token refresh.
        credentials = f"{config.user}:{config.token}".encode("utf-8")
        self._auth_headers = {
            "Authorization": "Basic " + base64.b64encode(credentials).decode("ascii"),
        }

    # -------------------------------------------------------------------------
    # HTTP plumbing
    # -------------------------------------------------------------------------
    def _send(
        self,
        path: str,
        method: str = "GET",
        data: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> JenkinsResponse:
        url = f"{self.config.url}/{path}"
        request = urllib.request.Request(
            url,
            data=data,
            method=method,
            headers={**self._auth_headers, **(headers or {})},
        )
        logger.debug("%s %s", method, url)

        try:
            if self.config.timeout is None:
                response = self._opener.open(request)
            else:
                response = self._opener.open(request, timeout=self.config.timeout)
            with response:
                return JenkinsResponse(
                    status=response.status,
                    reason=response.reason,
                    headers=dict(response.headers.items()),
                    body=_decode(response.read()),
                )
        except urllib.error.HTTPError as exc:
            # urllib raises for non-2xx; fold it back into a response value.
            try:
                body = _decode(exc.read())
            except OSError:
                body = ""
            headers = dict(exc.headers.items()) if exc.headers is not None else {}
            logger.debug("%s %s -> %s", method, url, exc.code)
            return JenkinsResponse(status=exc.code, reason=str(exc.reason), headers=headers, body=body)

    def _get(self, path: str) -> JenkinsResponse:
        return self._send(path).raise_for_status()

    def _post(self, path: str, form: Optional[dict[str, str]] = None) -> JenkinsResponse:
        if form is None:
            return self._send(path, method="POST").raise_for_status()
        body = urlencode(form).encode("utf-8")
        return self._send(path, method="POST", data=body, headers=_FORM_HEADERS).raise_for_status()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def get_job_info(self, job: str, tree: Optional[str] = None) -> Any:
        return self._get(f"{job_path(job)}/api/json{tree_query(tree)}").json()

    def get_build_info(self, job: str, build: str = DEFAULT_BUILD, tree: Optional[str] = None) -> Any:
        return self._get(f"{job_path(job)}/{build}/api/json{tree_query(tree)}").json()

    def get_param_definitions(self, job: str) -> list[dict[str, Any]]:
        """Parameter definitions of a job, flattened across its properties."""
        data = self.get_job_info(job, tree=PARAM_DEFINITIONS_TREE)
        return JobParameterDefinitions.from_json(data).definitions

    def get_console_output(self, job: str, build: str = DEFAULT_BUILD, tail: Optional[int] = None) -> str:
        """Console log of a build, tailed and size-capped (see core/console.py)."""
        text = self._get(f"{job_path(job)}/{build}/consoleText").body
        return shape_console_output(text, tail)

    def get_build_parameters(self, job: str, build: str) -> dict[str, str]:
        """The parameter values a past build was run with."""
        data = self.get_build_info(job, build, tree=BUILD_PARAMETERS_TREE)
        return BuildParameters.from_json(data).values

    def get_queue_item(self, queue_id: str) -> Any:
        return self._get(f"queue/item/{queue_id}/api/json").json()

    # -------------------------------------------------------------------------
    # Triggers
    # -------------------------------------------------------------------------
    def trigger_build(self, job: str) -> TriggeredBuild:
        response = self._post(f"{job_path(job)}/build")
        return TriggeredBuild(queue_url=response.location)

    def trigger_build_with_params(self, job: str, params: dict[str, str]) -> TriggeredBuild:
        response = self._post(f"{job_path(job)}/buildWithParameters", form=params)
        return TriggeredBuild(queue_url=response.location, parameters=dict(params))

    def rebuild(self, job: str, build: str) -> RebuildResult:
        """Re-run *build* with the parameters it was originally run with.

        Step 1 reads the old build's parameters; if that fails nothing is
        triggered.  Step 2 posts to buildWithParameters when there is at
        least one parameter, and to the plain build endpoint otherwise.
        """
        params = self.get_build_parameters(job, build)
        logger.debug("rebuild %s #%s with %d parameter(s)", job, build, len(params))

        if params:
            triggered = self.trigger_build_with_params(job, params)
        else:
            triggered = self.trigger_build(job)

        return RebuildResult(source_build=build, parameters=params, queue_url=triggered.queue_url)
