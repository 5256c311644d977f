from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: isolated working directory, captured console lines,
   a fixed clock and a factory that closes every Logger it builds.
"""

import os
import sys
from datetime import datetime
from typing import Any, Callable, Generator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from levelog.core.logger import Logger  # noqa: E402
from levelog.domain.models import LoggerConfig  # noqa: E402

FIXED_TIME = datetime(2024, 3, 9, 14, 5, 7)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def workdir(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Run the test inside a fresh directory so relative 'logs/' paths land there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def console_lines() -> List[str]:
    """Collect console lines; pass ``console_lines.append`` as the output function."""
    return []


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_TIME


@pytest.fixture
def make_logger(
        console_lines: List[str],
        fixed_clock: Callable[[], datetime],
) -> Generator[Callable[..., Logger], None, None]:
    """
    Build Loggers wired to the captured console and the fixed clock.

    Keyword arguments are LoggerConfig fields, except the collaborators
    accepted by Logger itself (file_sink, formatter, pause_hook, ...).

    Yields:
        Callable[..., Logger]: Factory; every Logger built is closed on teardown.
    """
    created: List[Logger] = []
    collaborators = {
        "console", "file_sink", "formatter", "caller_provider", "clock", "pause_hook", "exit_hook",
    }

    def _factory(**kwargs: Any) -> Logger:
        extra = {k: kwargs.pop(k) for k in list(kwargs) if k in collaborators}
        extra.setdefault("clock", fixed_clock)
        kwargs.setdefault("program_name", "app")
        kwargs.setdefault("colorize", False)
        logger = Logger(config=LoggerConfig(**kwargs), **extra)
        logger.set_output_function(console_lines.append)
        created.append(logger)
        return logger

    yield _factory

    for logger in created:
        logger.close()
