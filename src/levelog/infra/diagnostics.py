from __future__ import annotations

"""
Internal Diagnostics Logging.

The facility reports its own operational problems (unavailable log files,
failed flushes, isolated sink errors) through the standard library logging
tree under the "levelog" logger. This module attaches and detaches a
stderr handler for that tree without touching handlers owned by the host
application.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

PACKAGE_LOGGER_NAME = "levelog"

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Internal attributes used to tag our handlers and remember configuration
_HANDLER_TAG_ATTR: str = "_levelog_handler"
_CONFIGURED_FLAG_ATTR: str = "_levelog_configured"

DIAGNOSTICS_FMT = "levelog | %(levelname)s | %(name)s | %(message)s"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(
        level: str = "WARNING",
        *,
        stream: Optional[TextIO] = None,
        force: bool = False,
) -> logging.Logger:
    """
    Attach a stderr handler to the package logger, once.

    Repeated calls are no-ops unless force is set, in which case the
    previously attached handler is replaced.

    Args:
        level: Minimum level name for diagnostics (unknown names fall back to WARNING).
        stream: Destination stream, stderr by default.
        force: Re-create the handler even if already configured.

    Returns:
        logging.Logger: The package logger.
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    already_configured = bool(getattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False))
    if already_configured and not force:
        return pkg_logger

    _remove_our_handlers(pkg_logger)

    level_int = _parse_level(level)
    pkg_logger.setLevel(level_int)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level_int)
    handler.setFormatter(logging.Formatter(DIAGNOSTICS_FMT))
    setattr(handler, _HANDLER_TAG_ATTR, True)
    pkg_logger.addHandler(handler)

    setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, True)
    return pkg_logger


def reset_diagnostics() -> None:
    """Detach the handlers added by configure_diagnostics and clear the flag."""
    pkg_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    _remove_our_handlers(pkg_logger)
    pkg_logger.setLevel(logging.NOTSET)
    setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(pkg_logger: logging.Logger) -> None:
    for h in list(pkg_logger.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            pkg_logger.removeHandler(h)
            h.close()
