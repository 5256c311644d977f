from __future__ import annotations

"""
Integration tests for the internal diagnostics logger.

Verifies idempotent handler attachment and that operational problems of the
sinks surface on the 'levelog' logger tree.
"""

import io
import logging
from pathlib import Path
from typing import Generator, List

import pytest

from levelog.core.logger import Logger
from levelog.domain.models import LoggerConfig
from levelog.infra.diagnostics import (
    _HANDLER_TAG_ATTR,
    PACKAGE_LOGGER_NAME,
    configure_diagnostics,
    reset_diagnostics,
)
from levelog.infra.file_sink import FileSink


@pytest.fixture(autouse=True)
def clean_diagnostics() -> Generator[None, None, None]:
    reset_diagnostics()
    yield
    reset_diagnostics()


def _our_handlers() -> List[logging.Handler]:
    pkg_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    return [h for h in pkg_logger.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_configure_is_idempotent() -> None:
    """TC-01: Multiple configuration calls do not duplicate handlers."""
    configure_diagnostics("INFO")
    configure_diagnostics("INFO")

    assert len(_our_handlers()) == 1


def test_force_replaces_handler() -> None:
    configure_diagnostics("INFO")
    first = _our_handlers()[0]

    configure_diagnostics("DEBUG", force=True)

    handlers = _our_handlers()
    assert len(handlers) == 1
    assert handlers[0] is not first
    assert logging.getLogger(PACKAGE_LOGGER_NAME).level == logging.DEBUG


def test_unknown_level_falls_back_to_warning() -> None:
    configure_diagnostics("chatty")
    assert logging.getLogger(PACKAGE_LOGGER_NAME).level == logging.WARNING


def test_reset_detaches_handlers() -> None:
    configure_diagnostics()
    reset_diagnostics()
    assert _our_handlers() == []


def test_sink_failure_is_reported() -> None:
    """TC-05: An isolated sink failure is reported instead of raised."""
    stream = io.StringIO()
    configure_diagnostics("WARNING", stream=stream)

    def _broken_console(line: str) -> None:
        raise RuntimeError("console gone")

    logger = Logger(config=LoggerConfig(program_name="app", colorize=False))
    logger.set_output_function(_broken_console)
    logger.info("lost")

    output = stream.getvalue()
    assert "console sink failed" in output
    assert "console gone" in output


def test_contended_candidates_are_traced(tmp_path: Path) -> None:
    stream = io.StringIO()
    configure_diagnostics("DEBUG", stream=stream)

    holder = FileSink(log_dir=str(tmp_path))
    contender = FileSink(log_dir=str(tmp_path))
    try:
        holder.initialize("app")
        contender.initialize("app")
    finally:
        holder.close()
        contender.close()

    assert "unavailable" in stream.getvalue()
