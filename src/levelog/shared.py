from __future__ import annotations

"""
Process-Wide Logger Accessor.

Convenience module-level functions that forward to one shared Logger. The
shared instance must be installed explicitly with ``initialize``; any call
made before that fails fast with a ConfigurationError. Code that can receive
a Logger as a parameter should prefer that over this module.
"""

import threading
from typing import Any, Optional

from levelog.core.logger import Logger
from levelog.domain.errors import ConfigurationError

_instance: Optional[Logger] = None
_lock = threading.Lock()


def initialize(
        logger: Optional[Logger] = None,
        *,
        program_name: Optional[str] = None,
        output_to_file: bool = False,
        output_to_console: bool = True,
) -> Logger:
    """
    Install the shared Logger, replacing (and closing) any previous one.

    Args:
        logger: Ready-made instance to share. When omitted, one is built
            from the remaining keyword arguments.
        program_name: Log file stem for a newly built Logger.
        output_to_file: Enable file output for a newly built Logger.
        output_to_console: Enable console output for a newly built Logger.

    Returns:
        Logger: The shared instance.
    """
    global _instance
    if logger is None:
        logger = Logger(program_name, output_to_file, output_to_console)

    with _lock:
        previous, _instance = _instance, logger
    if previous is not None and previous is not logger:
        previous.close()
    return logger


def get_logger() -> Logger:
    """
    Return the shared Logger.

    Raises:
        ConfigurationError: If initialize() has not been called.
    """
    instance = _instance
    if instance is None:
        raise ConfigurationError("shared logger is not initialized; call levelog.shared.initialize() first")
    return instance


def is_initialized() -> bool:
    return _instance is not None


def reset() -> None:
    """Close and forget the shared Logger."""
    global _instance
    with _lock:
        previous, _instance = _instance, None
    if previous is not None:
        previous.close()


def trace(*parts: Any) -> None:
    get_logger().trace(*parts)


def debug(*parts: Any) -> None:
    get_logger().debug(*parts)


def info(*parts: Any) -> None:
    get_logger().info(*parts)


def warn(*parts: Any) -> None:
    get_logger().warn(*parts)


def error(*parts: Any) -> None:
    get_logger().error(*parts)


def fatal(err: Any) -> None:
    get_logger().fatal(err)
