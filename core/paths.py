# =============================================================================
# core/paths.py  —  Job Path Resolver
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Jenkins nests jobs inside folders, and every level of nesting shows up in
#   the URL as its own "job/<name>" pair:
#
#       "team/backend/deploy"  →  "job/team/job/backend/job/deploy"
#
#   Each segment is percent-encoded ON ITS OWN, so a job called
#   "release 1.0" stays one path element ("job/release%201.0") and a "?" or
#   "#" in a name can never leak into the query string.
#
# ENCODING:
#   We use the same safe set as JavaScript's encodeURIComponent, which is
#   what Jenkins' own UI produces: letters, digits and  - _ . ! ~ * ' ( )
#   are left alone, everything else (including "/") is escaped.
# =============================================================================

from urllib.parse import quote

JOB_MARKER = "job"

_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a single URL component (encodeURIComponent rules)."""
    return quote(value, safe=_COMPONENT_SAFE)


def job_path(job: str) -> str:
    """Turn a slash-delimited job name into Jenkins' folder-nested path.

    An empty name yields "job/" and is left for Jenkins to reject with 404.
    """
    return "/".join(f"{JOB_MARKER}/{encode_component(segment)}" for segment in job.split("/"))


def tree_query(tree: str | None) -> str:
    """Build the "?tree=..." suffix, or an empty string when no filter is given."""
    if not tree:
        return ""
    return f"?tree={encode_component(tree)}"
