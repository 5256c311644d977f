from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path helpers for the file sink: program name discovery, candidate log file
naming and idempotent directory creation.
"""

import os
import sys

from levelog.domain.constants import LOG_FILE_PATTERN

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_default_program_name() -> str:
    """
    Resolve the base name of the running program, without extension.

    Uses the launched script (sys.argv[0]) and falls back to the interpreter
    executable when the process was started without one (REPL, embedded).

    Returns:
        str: Program identifier used as the log file stem.
    """
    candidates = []
    if sys.argv and sys.argv[0] not in ("", "-c", "-m"):
        candidates.append(sys.argv[0])
    candidates.append(sys.executable or "python")

    for candidate in candidates:
        stem = os.path.splitext(os.path.basename(candidate))[0]
        if stem:
            return stem
    return "python"


def get_log_file_path(log_dir: str, program_name: str, index: int = 0) -> str:
    """
    Build the candidate log path for a given acquisition attempt.

    Attempt 0 carries no suffix (logs/app.log); later attempts append the
    attempt number (logs/app1.log, logs/app2.log, ...).

    Args:
        log_dir: Directory holding the log files.
        program_name: File stem.
        index: Acquisition attempt number.

    Returns:
        str: Relative or absolute path, following log_dir.
    """
    suffix = "" if index == 0 else str(index)
    return os.path.join(log_dir, LOG_FILE_PATTERN.format(program=program_name, suffix=suffix))


def ensure_dir(path: str) -> None:
    """
    Create a directory hierarchy if it does not exist yet.

    Args:
        path: Target directory.

    Raises:
        OSError: If the hierarchy cannot be created.
    """
    if path and not os.path.isdir(path):
        os.makedirs(path, exist_ok=True)
