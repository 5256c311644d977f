from __future__ import annotations

"""
Error Taxonomy.

Distinguishes programmer mistakes (surfaced immediately) from runtime
conditions that the logger absorbs on its own (file contention).
"""


class LevelogError(Exception):
    """Base class for every error raised by the logging facility."""


class ConfigurationError(LevelogError):
    """
    A programming mistake detected at the call site.

    Raised for unmapped severities, invalid configuration values, use of the
    shared accessor before initialization, and re-initializing a logger that
    already went through fatal shutdown.
    """


class FileAcquisitionError(LevelogError, OSError):
    """
    A candidate log path could not be locked for exclusive writing.

    Only raised inside the acquisition loop, which catches it and moves on to
    the next suffix. Callers of the public API never see it.
    """

    def __init__(self, path: str, reason: str = "locked by another writer"):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FatalApplicationError(LevelogError):
    """Wraps a non-exception payload handed to ``Logger.fatal``."""
