from __future__ import annotations

"""
Logger Core.

A Logger filters each emission against its active threshold, formats the
surviving records once and hands the line to the enabled sinks (colored
console, exclusive log file). Sinks are isolated from one another: a failing
file write never stops console output and vice versa.

Lifecycle: UNINITIALIZED -> INITIALIZING -> READY (-> re-initialize -> READY)
-> TERMINATED. Only ``fatal`` reaches TERMINATED, and it ends the process.
"""

import logging
import os
import sys
import threading
import traceback
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from levelog.core.formatter import CallerTagProvider, LineFormatter, StackCallerTag, StaticCallerTag
from levelog.domain.constants import FATAL_BANNER, FATAL_EXIT_STATUS
from levelog.domain.errors import ConfigurationError, FatalApplicationError
from levelog.domain.models import LoggerConfig, LoggerState, LogRecord
from levelog.domain.severity import Severity
from levelog.infra.console import ConsoleSink, OutputFunction
from levelog.infra.file_sink import FileSink

logger = logging.getLogger(__name__)


def wait_for_acknowledgment() -> None:
    """Block until Enter is pressed, when someone can actually press it."""
    stdin = sys.stdin
    if stdin is None or not stdin.isatty():
        return
    try:
        input("Press Enter to exit...")
    except EOFError:
        pass


def terminate_process(status: int) -> None:
    """
    End the whole process with the given status, from any thread.

    On the main thread this raises SystemExit so atexit handlers run. Elsewhere
    SystemExit would only end the calling thread, so the standard streams are
    flushed and the interpreter is left immediately.
    """
    if threading.current_thread() is threading.main_thread():
        sys.exit(status)

    for stream in (sys.stdout, sys.stderr):
        try:
            if stream is not None:
                stream.flush()
        except (OSError, ValueError):
            pass
    os._exit(status)


def describe_error(error: BaseException) -> str:
    """Render an exception with its traceback, as printed by the interpreter."""
    text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return text.rstrip("\n")


class Logger:
    """
    Leveled logger writing to the console and/or an exclusive log file.

    Emission calls are synchronous and may be used from several threads.
    Collaborators (sinks, formatter, caller tagging, clock, fatal hooks) can
    be injected; otherwise they are built from the configuration.
    """

    def __init__(
            self,
            program_name: Optional[str] = None,
            output_to_file: Optional[bool] = None,
            output_to_console: Optional[bool] = None,
            *,
            config: Optional[LoggerConfig] = None,
            console: Optional[ConsoleSink] = None,
            file_sink: Optional[FileSink] = None,
            formatter: Optional[LineFormatter] = None,
            caller_provider: Optional[CallerTagProvider] = None,
            clock: Optional[Callable[[], datetime]] = None,
            pause_hook: Optional[Callable[[], None]] = None,
            exit_hook: Optional[Callable[[int], Any]] = None,
    ):
        # Explicit arguments win over the matching fields of a given config
        config = (config or LoggerConfig(program_name=program_name)).with_overrides(
            program_name=program_name,
            output_to_file=output_to_file,
            output_to_console=output_to_console,
        )

        self._config = config
        self._level = config.level
        self._state = LoggerState.UNINITIALIZED
        self._file_enabled = False

        self._console = console or ConsoleSink(
            colorize=config.colorize,
            auto_reset=config.auto_reset_color,
        )
        self._file_sink = file_sink or FileSink(
            log_dir=config.log_dir,
            flush_interval_ms=config.flush_interval_ms,
            max_suffix=config.max_suffix,
        )
        self._formatter = formatter or LineFormatter(config.time_format)
        if caller_provider is None:
            caller_provider = StackCallerTag() if config.caller_tags else StaticCallerTag()
        self._caller_provider = caller_provider

        self._clock = clock or datetime.now
        self._pause_hook = pause_hook or wait_for_acknowledgment
        self._exit_hook = exit_hook or terminate_process

        self.initialize()

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], **collaborators: Any) -> "Logger":
        """
        Build a Logger from a plain settings mapping (e.g. a parsed JSON file).

        Args:
            settings: LoggerConfig fields by name; unknown keys end up in config.extra.
            **collaborators: Keyword-only Logger arguments (sinks, hooks, clock...).

        Raises:
            ConfigurationError: If a setting is invalid.
        """
        return cls(config=LoggerConfig.from_mapping(settings), **collaborators)

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def state(self) -> LoggerState:
        return self._state

    @property
    def level(self) -> Severity:
        return self._level

    @property
    def file_enabled(self) -> bool:
        return self._file_enabled

    @property
    def file_path(self) -> Optional[str]:
        return self._file_sink.path if self._file_enabled else None

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------

    def initialize(
            self,
            program_name: Optional[str] = None,
            output_to_file: Optional[bool] = None,
            output_to_console: Optional[bool] = None,
    ) -> None:
        """
        (Re-)initialize the sinks, releasing the previous file and flush timer.

        Arguments left as None keep their current configuration. File
        acquisition never raises: when no log file can be obtained the Logger
        stays READY with file output disabled.

        Raises:
            ConfigurationError: If the Logger already went through fatal().
        """
        if self._state is LoggerState.TERMINATED:
            raise ConfigurationError("Cannot re-initialize a terminated logger")

        self._state = LoggerState.INITIALIZING
        self._config = self._config.with_overrides(
            program_name=program_name,
            output_to_file=output_to_file,
            output_to_console=output_to_console,
        )

        self._file_sink.close()
        self._file_enabled = False
        if self._config.output_to_file:
            self._file_enabled = self._file_sink.initialize(self._config.program_name)

        self._state = LoggerState.READY

    def set_level(self, level: Any) -> None:
        """Change the active threshold; applies from the next emission on."""
        self._level = Severity.parse(level)

    def set_output_function(self, output: Optional[OutputFunction]) -> None:
        """Redirect console lines (None restores standard output)."""
        self._console.set_output(output)

    # -------------------------------------------------------------------------
    # EMISSION
    # -------------------------------------------------------------------------

    def trace(self, *parts: Any) -> None:
        self.log(Severity.TRACE, *parts)

    def debug(self, *parts: Any) -> None:
        self.log(Severity.DEBUG, *parts)

    def info(self, *parts: Any) -> None:
        self.log(Severity.INFO, *parts)

    def warn(self, *parts: Any) -> None:
        self.log(Severity.WARNING, *parts)

    warning = warn

    def error(self, *parts: Any) -> None:
        self.log(Severity.ERROR, *parts)

    def log(self, severity: Any, *parts: Any) -> None:
        """
        Emit a record at the given severity.

        Records below the threshold return before any formatting or caller
        capture happens.

        Raises:
            ConfigurationError: If the severity is not a known level.
        """
        severity = Severity.parse(severity)
        if severity < self._level or self._state is LoggerState.TERMINATED:
            return

        record = LogRecord(
            timestamp=self._clock(),
            severity=severity,
            caller=self._caller_provider.capture(),
            parts=parts,
        )
        line = self._formatter.format_record(record)

        if self._config.output_to_console:
            self._dispatch("console", self._console.write, line, severity)
        if self._file_enabled:
            self._dispatch("file", self._file_sink.append, line)

    def fatal(self, error: Any) -> None:
        """
        Log a fatal error and END THE PROCESS.

        Writes the FATAL banner and the error detail at ERROR severity,
        releases the log file so everything reaches disk, waits for the pause
        hook (Enter on an interactive console by default) and calls the exit
        hook with status 1 (terminate_process by default, which also works from
        worker threads). Headless deployments pass a
        no-op pause_hook.
        """
        if not isinstance(error, BaseException):
            error = FatalApplicationError(str(error))

        self.error(FATAL_BANNER)
        self.error(describe_error(error))
        self.close()

        self._pause_hook()
        self._state = LoggerState.TERMINATED
        self._exit_hook(FATAL_EXIT_STATUS)

    # -------------------------------------------------------------------------
    # RESOURCES
    # -------------------------------------------------------------------------

    def flush(self) -> None:
        self._dispatch("file", self._file_sink.flush_now)

    def close(self) -> None:
        """Stop the flush timer and release the log file. Console output keeps working."""
        self._file_enabled = False
        self._file_sink.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _dispatch(self, sink_name: str, write: Callable[..., None], *args: Any) -> None:
        try:
            write(*args)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.warning(f"Logger: {sink_name} sink failed, record dropped for this sink: {e}")
