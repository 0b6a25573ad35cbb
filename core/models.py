# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Jenkins answers with big, loosely-typed JSON documents.  We never model a
# whole document.  Each class below is a PARTIAL schema: it picks out only
# the fields this project actually reads and ignores everything else, so a
# Jenkins upgrade that adds fields (or a plugin that sprinkles "_class" keys
# everywhere) never breaks decoding.
#
# The other half of this module is the HTTP-boundary result type,
# JenkinsResponse.  Every request produces one, success or failure, and the
# caller decides what a failure means by calling raise_for_status().
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any

# How much of an error body we quote back to the caller.
ERROR_BODY_LIMIT = 500


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------
class JenkinsError(Exception):
    """Base class for every failure raised by the core package."""


class JenkinsHTTPError(JenkinsError):
    """Jenkins answered with a non-2xx status.

    The message always has the form "Jenkins <status> <reason>: <body>" with
    the body cut to ERROR_BODY_LIMIT characters, so both the status code and
    the server's own explanation reach the LLM.
    """

    def __init__(self, status: int, reason: str, body: str = ""):
        self.status = status
        self.reason = reason
        self.body = body[:ERROR_BODY_LIMIT]
        super().__init__(f"Jenkins {status} {reason}: {self.body}")


# -----------------------------------------------------------------------------
# JenkinsResponse — the result of ONE HTTP round-trip
# -----------------------------------------------------------------------------
@dataclass
class JenkinsResponse:
    """Status, headers and body text of a Jenkins response (any status)."""

    status: int
    reason: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def location(self) -> str:
        """The Location header (the queue item URL after a trigger), or ""."""
        for name, value in self.headers.items():
            if name.lower() == "location":
                return value
        return ""

    def raise_for_status(self) -> "JenkinsResponse":
        if not self.ok:
            raise JenkinsHTTPError(self.status, self.reason, self.body)
        return self

    def json(self) -> Any:
        try:
            return json.loads(self.body)
        except ValueError as exc:
            raise JenkinsError(
                f"Jenkins returned invalid JSON ({exc}): {self.body[:ERROR_BODY_LIMIT]}"
            ) from exc


# -----------------------------------------------------------------------------
# JobParameterDefinitions — what parameters a job ACCEPTS
# -----------------------------------------------------------------------------
# Jenkins hides parameter definitions inside the job's "property" list:
#
#   {"property": [
#       {"_class": "...ParametersDefinitionProperty",
#        "parameterDefinitions": [{"name": "ENV", "type": "ChoiceParameterDefinition", ...}]},
#       {"_class": "...DisableConcurrentBuildsJobProperty"}
#   ]}
#
# Most properties have nothing to do with parameters, so we flatten every
# "parameterDefinitions" list we find into one ordered list.
# -----------------------------------------------------------------------------
@dataclass
class JobParameterDefinitions:
    definitions: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "JobParameterDefinitions":
        definitions: list[dict[str, Any]] = []
        if isinstance(data, dict):
            for prop in data.get("property") or []:
                if isinstance(prop, dict):
                    definitions.extend(prop.get("parameterDefinitions") or [])
        return cls(definitions=definitions)


# -----------------------------------------------------------------------------
# BuildParameters — what parameters a past build was RUN WITH
# -----------------------------------------------------------------------------
# Same trick, different place: a build records its parameters as one of its
# "actions":
#
#   {"actions": [
#       {"_class": "hudson.model.ParametersAction",
#        "parameters": [{"name": "ENV", "value": "prod"}, {"name": "DRY_RUN", "value": false}]},
#       {"_class": "hudson.model.CauseAction"}
#   ]}
#
# Only entries with a name AND a value key are kept.  Values are sent back
# to Jenkins as form fields, so they are coerced to text the way a browser
# form would: false → "false", null → "null", 3.0 → "3", ["a", "b"] → "a,b".
# -----------------------------------------------------------------------------
def _as_form_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        # nulls inside a list render as empty strings
        return ",".join("" if item is None else _as_form_value(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


@dataclass
class BuildParameters:
    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> "BuildParameters":
        values: dict[str, str] = {}
        if isinstance(data, dict):
            for action in data.get("actions") or []:
                if not isinstance(action, dict):
                    continue
                for param in action.get("parameters") or []:
                    if isinstance(param, dict) and param.get("name") and "value" in param:
                        values[param["name"]] = _as_form_value(param["value"])
        return cls(values=values)


# -----------------------------------------------------------------------------
# Trigger results
# -----------------------------------------------------------------------------
@dataclass
class TriggeredBuild:
    """A build request accepted by Jenkins.

    queue_url is the Location header Jenkins sends back, e.g.
    "https://jenkins.example.com/queue/item/42/".  The build number is not
    known yet; poll the queue item to get it.
    """

    queue_url: str
    parameters: dict[str, str] = field(default_factory=dict)


@dataclass
class RebuildResult:
    source_build: str
    parameters: dict[str, str]
    queue_url: str
