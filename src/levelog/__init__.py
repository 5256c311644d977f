from __future__ import annotations

"""
Leveled logging with a colored console and exclusive, periodically flushed
log files.

Build a Logger directly (Logger("app", output_to_file=True)), from a
LoggerConfig, or from a settings mapping such as a parsed JSON file with
Logger.from_settings(data); keys the config does not know are kept in
LoggerConfig.extra. levelog.shared offers an optional process-wide instance.
"""

from .core.formatter import LineFormatter, StackCallerTag, StaticCallerTag
from .core.logger import Logger
from .domain.errors import (
    ConfigurationError,
    FatalApplicationError,
    FileAcquisitionError,
    LevelogError,
)
from .domain.models import LoggerConfig, LoggerState, LogRecord
from .domain.severity import Severity
from .infra.console import ConsoleSink
from .infra.diagnostics import configure_diagnostics
from .infra.file_sink import FileSink

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "ConsoleSink",
    "FatalApplicationError",
    "FileAcquisitionError",
    "FileSink",
    "LevelogError",
    "LineFormatter",
    "LogRecord",
    "Logger",
    "LoggerConfig",
    "LoggerState",
    "Severity",
    "StackCallerTag",
    "StaticCallerTag",
    "configure_diagnostics",
]
