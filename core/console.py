# =============================================================================
# core/console.py  —  Console log shaping
# =============================================================================
#
# Build logs can be enormous.  Before a log goes back to the LLM we apply
# two cuts, in this order:
#   1. tail:     keep only the last N lines, if the caller asked for that
#   2. truncate: never return more than MAX_CONSOLE_CHARS characters; keep
#                the END of the log (where failures usually are) and mark
#                the cut with TRUNCATION_MARKER
# =============================================================================

MAX_CONSOLE_CHARS = 100_000
TRUNCATION_MARKER = "[... truncated ...]\n"


def tail_lines(text: str, tail: int | None) -> str:
    """Keep the last *tail* lines of *text*.  None, 0 or negative keeps everything."""
    if not tail or tail <= 0:
        return text
    lines = text.split("\n")
    return "\n".join(lines[-tail:])


def truncate_console(text: str, limit: int = MAX_CONSOLE_CHARS) -> str:
    """Keep the trailing *limit* characters, prefixed by the truncation marker."""
    if len(text) <= limit:
        return text
    return TRUNCATION_MARKER + text[-limit:]


def shape_console_output(text: str, tail: int | None = None) -> str:
    return truncate_console(tail_lines(text, tail))
