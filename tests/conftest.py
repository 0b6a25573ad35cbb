"""
Shared pytest fixtures for the Jenkins adapter and tool server tests.

No test talks to a real Jenkins.  The client is built around FakeOpener, a
stand-in for urllib's OpenerDirector that records every Request it is given
and replays canned responses in order:

    opener.reply(200, {"name": "app"})                      → JSON body
    opener.reply(201, headers={"Location": ".../42/"})      → trigger answer
    opener.reply(500, "internal error", reason="Server Error")  → HTTPError
"""

from __future__ import annotations

import io
import json
import urllib.error
from email.message import Message
from urllib.parse import parse_qs

import pytest

from core.client import JenkinsClient
from core.config import JenkinsConfig

JENKINS_URL = "https://jenkins.example.com"
QUEUE_URL = f"{JENKINS_URL}/queue/item/42/"


def _message(headers: dict[str, str] | None) -> Message:
    msg = Message()
    for name, value in (headers or {}).items():
        msg[name] = value
    return msg


class FakeResponse:
    def __init__(self, status: int, reason: str, body: bytes, headers: dict[str, str] | None):
        self.status = status
        self.reason = reason
        self.headers = _message(headers)
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeOpener:
    """Records urllib Requests and answers them from a FIFO of canned replies."""

    def __init__(self):
        self.requests = []
        self.timeouts = []
        self._replies = []

    def reply(self, status: int = 200, body="", headers: dict[str, str] | None = None, reason: str = "OK"):
        if not isinstance(body, (str, bytes)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._replies.append((status, reason, body, headers))
        return self

    def fail(self, exc: Exception):
        self._replies.append(exc)
        return self

    def open(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if not self._replies:
            raise AssertionError(f"unexpected request: {request.get_method()} {request.full_url}")

        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply

        status, reason, body, headers = reply
        if not 200 <= status < 300:
            raise urllib.error.HTTPError(request.full_url, status, reason, _message(headers), io.BytesIO(body))
        return FakeResponse(status, reason, body, headers)

    # --- helpers for assertions ---

    @property
    def urls(self) -> list[str]:
        return [r.full_url for r in self.requests]

    @property
    def methods(self) -> list[str]:
        return [r.get_method() for r in self.requests]

    def form(self, index: int = -1) -> dict[str, str]:
        """Decode the form body of a recorded request into a flat dict."""
        data = self.requests[index].data.decode("utf-8")
        return {k: v[0] for k, v in parse_qs(data, keep_blank_values=True).items()}


@pytest.fixture()
def config() -> JenkinsConfig:
    # Trailing slash on purpose: it must be stripped.
    return JenkinsConfig(url=JENKINS_URL + "/", user="ci-bot", token="s3cret")


@pytest.fixture()
def opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture()
def client(config, opener) -> JenkinsClient:
    return JenkinsClient(config, opener=opener)
