from __future__ import annotations

"""
Colored Console Sink.

Writes formatted lines to standard output, or through a swappable output
function. When the lines go to a terminal, the foreground color for the
line's severity is switched first. The switch is a global side effect on the
terminal and, unless auto_reset is enabled, is left in place after the
write: two loggers writing concurrently can interleave colors. Redirected
output (custom output function, pipe, file) never receives escape codes.
"""

import sys
from typing import Callable, Dict, Optional, TextIO

import colorama
from colorama import Fore, Style

from levelog.domain.errors import ConfigurationError
from levelog.domain.severity import Severity

OutputFunction = Callable[[str], None]

# Fore.WHITE is the terminal's regular light gray, LIGHTWHITE_EX the bright white
COLORS: Dict[Severity, str] = {
    Severity.TRACE: Fore.MAGENTA,
    Severity.DEBUG: Fore.WHITE,
    Severity.INFO: Fore.LIGHTWHITE_EX,
    Severity.WARNING: Fore.YELLOW,
    Severity.ERROR: Fore.RED,
}

_windows_console_ready = False


def _enable_windows_console() -> None:
    global _windows_console_ready
    if not _windows_console_ready:
        colorama.just_fix_windows_console()
        _windows_console_ready = True


class ConsoleSink:
    """
    Console destination with severity colors.

    Attributes:
        colorize: Switch the terminal color before each line (terminals only).
        auto_reset: Write a style reset after each line.
    """

    def __init__(
            self,
            output: Optional[OutputFunction] = None,
            stream: Optional[TextIO] = None,
            colorize: bool = True,
            auto_reset: bool = False,
    ):
        self._output: Optional[OutputFunction] = output
        self._stream = stream
        self.colorize = colorize
        self.auto_reset = auto_reset
        _enable_windows_console()

    @property
    def output(self) -> OutputFunction:
        return self._output or self._write_to_stream

    def set_output(self, output: Optional[OutputFunction]) -> None:
        """
        Swap the function receiving each line; None restores standard output.

        Takes effect on the next write, no re-initialization needed.
        """
        self._output = output

    def write(self, line: str, severity: Severity) -> None:
        """
        Write one line, colored when it goes straight to a terminal.

        Raises:
            ConfigurationError: If the severity has no color mapping.
        """
        try:
            color = COLORS[severity]
        except KeyError:
            raise ConfigurationError(f"No console color mapped for severity {severity!r}") from None

        if self._output is not None:
            self._output(line)
            return

        stream = self._current_stream()
        styled = self.colorize and _is_terminal(stream)
        if styled:
            stream.write(color)
        self._write_to_stream(line)
        if styled and self.auto_reset:
            stream.write(Style.RESET_ALL)
        stream.flush()

    def _current_stream(self) -> TextIO:
        return self._stream or sys.stdout

    def _write_to_stream(self, line: str) -> None:
        self._current_stream().write(line + "\n")


def _is_terminal(stream: TextIO) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False
