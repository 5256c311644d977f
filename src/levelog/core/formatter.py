from __future__ import annotations

"""
Line Formatting and Caller Tagging.

Renders a record into a single text line:

    <time> [<SEVERITY>] [<caller>]:<message parts joined by spaces>

Message content is never escaped; embedded newlines, brackets and colons
are written verbatim. Caller tags come from a pluggable provider so that the
stack inspection stays optional.
"""

import inspect
import os
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

from levelog.domain.constants import (
    CALLER_METHOD_WIDTH,
    CALLER_PLACEHOLDER,
    CALLER_SEPARATOR,
    CALLER_TYPE_WIDTH,
    CALLER_UNKNOWN,
    DEFAULT_TIME_FORMAT,
    LINE_TEMPLATE,
    MESSAGE_SEPARATOR,
)
from levelog.domain.models import LogRecord
from levelog.domain.severity import Severity

# Frames living under this directory belong to the logging facility itself
_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


# -----------------------------------------------------------------------------
# CALLER TAG PROVIDERS
# -----------------------------------------------------------------------------

class CallerTagProvider(Protocol):
    def capture(self) -> str:
        ...


class StaticCallerTag:
    """Returns the same tag for every record."""

    def __init__(self, tag: str = CALLER_PLACEHOLDER):
        self.tag = tag

    def capture(self) -> str:
        return self.tag


class StackCallerTag:
    """
    Best-effort capture of the type and method that called the logger.

    Walks outwards from the current frame to the first frame whose source
    file is outside the levelog package, so the tag names the user code
    regardless of how many internal layers (shared accessor, fatal) sit in
    between.
    """

    def __init__(self, package_dir: str = _PACKAGE_DIR):
        self._package_dir = package_dir

    def capture(self) -> str:
        try:
            frame = self._find_caller_frame()
            if frame is None:
                return CALLER_UNKNOWN
            try:
                return format_caller(_frame_type_name(frame), frame.f_code.co_name)
            finally:
                del frame
        except Exception:
            return CALLER_UNKNOWN

    def _find_caller_frame(self) -> Optional[Any]:
        frame = inspect.currentframe()
        try:
            while frame is not None:
                filename = os.path.abspath(frame.f_code.co_filename)
                if not filename.startswith(self._package_dir + os.sep):
                    return frame
                frame = frame.f_back
            return None
        except Exception:
            return None


def format_caller(type_name: str, method_name: str) -> str:
    """
    Lay out a caller tag as fixed-width type and method columns.

    Args:
        type_name: Declaring type (truncated/padded to 8 chars).
        method_name: Method name (truncated/padded to 14 chars).

    Returns:
        str: "<type:8>   <method:14>".
    """
    return "{0}{1}{2}".format(
        type_name[:CALLER_TYPE_WIDTH].ljust(CALLER_TYPE_WIDTH),
        CALLER_SEPARATOR,
        method_name[:CALLER_METHOD_WIDTH].ljust(CALLER_METHOD_WIDTH),
    )


def _frame_type_name(frame: Any) -> str:
    f_locals = frame.f_locals
    if "self" in f_locals:
        return type(f_locals["self"]).__name__
    if "cls" in f_locals and isinstance(f_locals["cls"], type):
        return f_locals["cls"].__name__
    module = frame.f_globals.get("__name__") or "?"
    return module.rsplit(".", 1)[-1]


# -----------------------------------------------------------------------------
# LINE FORMATTER
# -----------------------------------------------------------------------------

class LineFormatter:
    """
    Turns records into text lines.

    Attributes:
        time_format: strftime pattern for the time-of-day column.
    """

    def __init__(self, time_format: str = DEFAULT_TIME_FORMAT):
        self.time_format = time_format

    def format(self, timestamp: datetime, severity: Severity, caller: str, parts: Iterable[Any]) -> str:
        return LINE_TEMPLATE.format(
            time=timestamp.strftime(self.time_format),
            severity=severity.name,
            caller=caller,
            message=MESSAGE_SEPARATOR.join(str(part) for part in parts),
        )

    def format_record(self, record: LogRecord) -> str:
        return self.format(record.timestamp, record.severity, record.caller, record.parts)
