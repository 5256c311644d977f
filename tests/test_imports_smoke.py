# tests/test_imports_smoke.py
# -----------------------------------------------------------------------------
# Smoke tests for the public package surface.
#
# Goals:
# - Ensure the package is importable in any environment.
# - Validate levelog exposes the expected public API.
# -----------------------------------------------------------------------------

from __future__ import annotations

import levelog
from levelog import shared


def test_package_importable():
    assert levelog is not None
    assert levelog.__version__


def test_public_api_contract():
    required = [
        "Logger",
        "LoggerConfig",
        "LoggerState",
        "LogRecord",
        "Severity",
        "LineFormatter",
        "StackCallerTag",
        "StaticCallerTag",
        "ConsoleSink",
        "FileSink",
        "ConfigurationError",
        "FileAcquisitionError",
        "FatalApplicationError",
        "LevelogError",
        "configure_diagnostics",
    ]
    for name in required:
        assert hasattr(levelog, name), f"levelog missing: {name}"


def test_shared_accessor_contract():
    for name in ["initialize", "get_logger", "is_initialized", "reset", "trace", "debug", "info", "warn", "error", "fatal"]:
        assert callable(getattr(shared, name)), f"levelog.shared missing: {name}"
