# =============================================================================
# core/config.py  —  Jenkins connection settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the Jenkins base URL and credentials from the environment ONCE, at
#   startup, into a frozen dataclass.  The dataclass is then handed to the
#   JenkinsClient explicitly; nothing else in the project reads JENKINS_*.
#
# ENVIRONMENT VARIABLES:
#   JENKINS_URL      Base URL, e.g. https://jenkins.example.com (trailing
#                    slashes are stripped)
#   JENKINS_USER     Jenkins username
#   JENKINS_TOKEN    Jenkins API token (NOT the password)
#   JENKINS_TIMEOUT  Optional socket timeout in seconds.  Unset means the
#                    transport default (block until the server answers).
#
# Missing credentials are NOT rejected here.  Jenkins answers 401 on the
# first call, and that error reaches the caller like any other HTTP failure.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class JenkinsConfig:
    """Where the Jenkins server lives and how to authenticate against it."""

    url: str
    user: str = ""
    token: str = ""
    timeout: Optional[float] = None

    def __post_init__(self):
        # frozen=True, so go through object.__setattr__
        object.__setattr__(self, "url", self.url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JenkinsConfig":
        """Build the config from JENKINS_* variables.

        Args:
            environ: Mapping to read from.  Defaults to os.environ; tests
                     pass a plain dict.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("JENKINS_TIMEOUT", "").strip()
        timeout = float(raw_timeout) if raw_timeout else None

        return cls(
            url=env.get("JENKINS_URL", ""),
            user=env.get("JENKINS_USER", ""),
            token=env.get("JENKINS_TOKEN", ""),
            timeout=timeout,
        )

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return (
            f"JenkinsConfig(url={self.url!r}, user={self.user!r}, "
            f"token={'***' if self.token else ''!r}, timeout={self.timeout!r})"
        )
