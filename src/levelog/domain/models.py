from __future__ import annotations

"""
Logging Domain Models.

Defines the per-call LogRecord, the immutable LoggerConfig that drives a
Logger instance, and the lifecycle states a Logger moves through.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from levelog.domain.constants import (
    DEFAULT_FLUSH_INTERVAL_MS,
    DEFAULT_LOG_DIR,
    DEFAULT_MAX_SUFFIX,
    DEFAULT_TIME_FORMAT,
    MESSAGE_SEPARATOR,
)
from levelog.domain.errors import ConfigurationError
from levelog.domain.severity import Severity
from levelog.infra.fs import get_default_program_name

# -----------------------------------------------------------------------------
# RECORD MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogRecord:
    """
    One emission, alive only between filtering and formatting.

    Attributes:
        timestamp: Wall-clock time of the call.
        severity: Level the record was emitted at.
        caller: Caller tag ("---" when tagging is disabled).
        parts: Raw message parts as passed by the caller.
    """
    timestamp: datetime
    severity: Severity
    caller: str
    parts: Tuple[Any, ...] = ()

    @property
    def message(self) -> str:
        return MESSAGE_SEPARATOR.join(str(part) for part in self.parts)


class LoggerState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    TERMINATED = "terminated"


# -----------------------------------------------------------------------------
# CONFIGURATION MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LoggerConfig:
    """
    Immutable configuration of a Logger instance.

    Only the threshold changes after construction (Logger.set_level);
    everything else is replaced wholesale by re-initializing the Logger.

    Attributes:
        program_name: Log file stem. None resolves to the executable name.
        level: Minimum severity that reaches the sinks.
        output_to_file: Enable the exclusive file sink.
        output_to_console: Enable the colored console sink.
        flush_interval_ms: Period of the background flush.
        log_dir: Directory of the log files.
        max_suffix: Highest retry suffix tried during file acquisition.
        time_format: strftime pattern for the time of day.
        caller_tags: Capture the calling type and method for each line.
        colorize: Emit the severity color before each console line.
        auto_reset_color: Reset the console style after each line.
    """
    program_name: Optional[str] = None
    level: Severity = Severity.TRACE
    output_to_file: bool = False
    output_to_console: bool = True

    flush_interval_ms: int = DEFAULT_FLUSH_INTERVAL_MS
    log_dir: str = DEFAULT_LOG_DIR
    max_suffix: int = DEFAULT_MAX_SUFFIX

    time_format: str = DEFAULT_TIME_FORMAT
    caller_tags: bool = False
    colorize: bool = True
    auto_reset_color: bool = False

    extra: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        name = self.program_name
        if name is None:
            name = get_default_program_name()
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"Invalid program name: {self.program_name!r}")
        object.__setattr__(self, "program_name", name.strip())
        object.__setattr__(self, "level", Severity.parse(self.level))

        for flag in ("output_to_file", "output_to_console", "caller_tags", "colorize", "auto_reset_color"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigurationError(f"'{flag}' must be a boolean, got {getattr(self, flag)!r}")

        if not _is_int(self.flush_interval_ms) or self.flush_interval_ms <= 0:
            raise ConfigurationError(f"'flush_interval_ms' must be a positive integer, got {self.flush_interval_ms!r}")
        if not _is_int(self.max_suffix) or self.max_suffix < 0:
            raise ConfigurationError(f"'max_suffix' must be a non-negative integer, got {self.max_suffix!r}")
        if not isinstance(self.log_dir, str) or not self.log_dir:
            raise ConfigurationError(f"Invalid log directory: {self.log_dir!r}")
        if not isinstance(self.time_format, str):
            raise ConfigurationError(f"Invalid time format: {self.time_format!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LoggerConfig":
        """
        Build a configuration from a plain mapping (e.g. a parsed settings file).

        Unknown keys are kept aside in ``extra`` instead of failing, so newer
        settings files still load.

        Args:
            data: Key/value pairs named after the dataclass fields.

        Returns:
            LoggerConfig: Validated configuration.

        Raises:
            ConfigurationError: If the mapping or one of its values is invalid.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Expected a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(extra=extra, **kwargs)

    def with_overrides(self, **changes: Any) -> "LoggerConfig":
        """Return a copy with the non-None keyword arguments applied."""
        effective = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **effective) if effective else self


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
