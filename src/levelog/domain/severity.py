from __future__ import annotations

"""
Severity Levels.

Defines the ordered enumeration used for threshold filtering. The declared
order places WARNING below INFO and is kept as-is on purpose: filtering
compares the integer values directly.
"""

from enum import IntEnum
from typing import Any, Dict

from levelog.domain.errors import ConfigurationError


class Severity(IntEnum):
    TRACE = 0
    DEBUG = 1
    WARNING = 2
    INFO = 3
    ERROR = 4

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """
        Resolve a severity from an enum member, its integer value or its name.

        Args:
            value: Severity, int, or case-insensitive level name ("WARN" allowed).

        Returns:
            Severity: The matching member.

        Raises:
            ConfigurationError: If the value does not name a known severity.
        """
        if isinstance(value, cls):
            return value

        # bool is an int subclass but never a meaningful level
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ConfigurationError(f"Unknown severity value: {value!r}") from None

        if isinstance(value, str):
            member = _NAME_MAP.get(value.strip().upper())
            if member is not None:
                return member

        raise ConfigurationError(f"Unknown severity: {value!r}")


_NAME_MAP: Dict[str, Severity] = {
    "TRACE": Severity.TRACE,
    "DEBUG": Severity.DEBUG,
    "WARNING": Severity.WARNING,
    "WARN": Severity.WARNING,
    "INFO": Severity.INFO,
    "ERROR": Severity.ERROR,
}
