"""Unit tests for core/console.py — tailing and size-capping build logs."""

from __future__ import annotations

import pytest

from core.console import (
    MAX_CONSOLE_CHARS,
    TRUNCATION_MARKER,
    shape_console_output,
    tail_lines,
    truncate_console,
)


def _log(n: int) -> str:
    return "\n".join(f"line {i}" for i in range(1, n + 1))


class TestTailLines:
    def test_keeps_exact_suffix(self):
        text = _log(10)
        assert tail_lines(text, 3) == "line 8\nline 9\nline 10"

    def test_tail_matches_original_suffix(self):
        text = _log(500)
        lines = text.split("\n")
        assert tail_lines(text, 37) == "\n".join(lines[-37:])

    def test_tail_larger_than_log(self):
        text = _log(5)
        assert tail_lines(text, 50) == text

    @pytest.mark.parametrize("tail", [None, 0, -3])
    def test_no_tail_keeps_everything(self, tail):
        text = _log(5)
        assert tail_lines(text, tail) == text

    def test_trailing_newline_counts_as_a_line(self):
        assert tail_lines("a\nb\nc\n", 2) == "c\n"


class TestTruncateConsole:
    def test_short_output_unchanged(self):
        text = "X" * MAX_CONSOLE_CHARS
        assert truncate_console(text) == text

    def test_long_output_keeps_tail(self):
        text = "H" * 10 + "T" * MAX_CONSOLE_CHARS
        result = truncate_console(text)

        assert result.startswith(TRUNCATION_MARKER)
        assert result[len(TRUNCATION_MARKER):] == text[-MAX_CONSOLE_CHARS:]
        assert len(result) == len(TRUNCATION_MARKER) + MAX_CONSOLE_CHARS
        assert "H" not in result

    def test_custom_limit(self):
        assert truncate_console("abcdef", limit=2) == TRUNCATION_MARKER + "ef"


class TestShapeConsoleOutput:
    def test_tail_applied_before_truncation(self):
        text = "\n".join("x" * 999 for _ in range(300))  # ~300k chars
        result = shape_console_output(text, tail=50)

        assert not result.startswith(TRUNCATION_MARKER)
        assert result.count("\n") == 49

    def test_truncates_when_tail_still_too_long(self):
        text = "\n".join("x" * 999 for _ in range(300))
        result = shape_console_output(text, tail=200)

        assert result.startswith(TRUNCATION_MARKER)
        assert len(result) == len(TRUNCATION_MARKER) + MAX_CONSOLE_CHARS
