from __future__ import annotations

"""
Unit tests for the colored console sink.

Verifies:
1. Severity-to-color mapping written before each line on a terminal.
2. Plain output on pipes, files and redirected output functions.
3. Runtime swapping of the output function, optional style reset and
   rejection of unmapped severities.
"""

import io
from typing import List

import pytest
from colorama import Fore, Style

from levelog.domain.errors import ConfigurationError
from levelog.domain.severity import Severity
from levelog.infra.console import COLORS, ConsoleSink


class TerminalStream(io.StringIO):
    """In-memory stream that reports itself as an interactive terminal."""

    def isatty(self) -> bool:
        return True


@pytest.mark.parametrize("severity, color", [
    (Severity.TRACE, Fore.MAGENTA),
    (Severity.DEBUG, Fore.WHITE),
    (Severity.INFO, Fore.LIGHTWHITE_EX),
    (Severity.WARNING, Fore.YELLOW),
    (Severity.ERROR, Fore.RED),
])
def test_color_written_before_line_on_terminal(severity: Severity, color: str) -> None:
    stream = TerminalStream()
    sink = ConsoleSink(stream=stream)

    sink.write("msg", severity)

    assert stream.getvalue() == color + "msg\n"


def test_every_severity_is_mapped() -> None:
    assert set(COLORS) == set(Severity)


def test_color_state_is_not_reset_by_default() -> None:
    stream = TerminalStream()
    sink = ConsoleSink(stream=stream)

    sink.write("a", Severity.ERROR)
    sink.write("b", Severity.ERROR)

    assert stream.getvalue() == Fore.RED + "a\n" + Fore.RED + "b\n"


def test_auto_reset_appends_reset_sequence() -> None:
    stream = TerminalStream()
    sink = ConsoleSink(stream=stream, auto_reset=True)

    sink.write("msg", Severity.WARNING)

    assert stream.getvalue() == Fore.YELLOW + "msg\n" + Style.RESET_ALL


def test_colorize_disabled_writes_plain_lines() -> None:
    stream = TerminalStream()
    sink = ConsoleSink(stream=stream, colorize=False)

    sink.write("plain", Severity.INFO)

    assert stream.getvalue() == "plain\n"


def test_non_terminal_stream_gets_no_escape_codes() -> None:
    """TC-06: Pipes and files receive the bare line."""
    stream = io.StringIO()
    sink = ConsoleSink(stream=stream)

    sink.write("piped", Severity.ERROR)

    assert stream.getvalue() == "piped\n"


def test_redirected_output_leaves_stream_untouched() -> None:
    """TC-07: Once redirected, no color bytes reach the console stream."""
    stream = TerminalStream()
    lines: List[str] = []
    sink = ConsoleSink(output=lines.append, stream=stream)

    sink.write("a", Severity.INFO)
    sink.write("b", Severity.ERROR)

    assert lines == ["a", "b"]
    assert stream.getvalue() == ""


def test_unmapped_severity_is_a_configuration_error() -> None:
    sink = ConsoleSink(output=lambda line: None)
    with pytest.raises(ConfigurationError):
        sink.write("msg", 42)  # type: ignore[arg-type]


def test_output_function_can_be_swapped_at_runtime(capsys: pytest.CaptureFixture[str]) -> None:
    """TC-09: Redirection and restoration need no re-initialization."""
    first: List[str] = []
    second: List[str] = []
    sink = ConsoleSink(output=first.append)

    sink.write("one", Severity.INFO)
    sink.set_output(second.append)
    sink.write("two", Severity.INFO)
    sink.set_output(None)
    sink.write("three", Severity.INFO)

    assert first == ["one"]
    assert second == ["two"]
    assert capsys.readouterr().out == "three\n"


def test_default_stream_is_current_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    sink = ConsoleSink()

    sink.write("hello", Severity.TRACE)

    # Captured stdout is not a terminal, so the line arrives uncolored
    assert capsys.readouterr().out == "hello\n"


def test_output_property_reflects_active_destination() -> None:
    lines: List[str] = []
    stream = io.StringIO()
    sink = ConsoleSink(stream=stream)

    sink.output("direct")
    sink.set_output(lines.append)

    assert sink.output == lines.append
    assert stream.getvalue() == "direct\n"
