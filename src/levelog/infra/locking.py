from __future__ import annotations

"""
Exclusive File Locks.

Non-blocking, whole-file exclusive locks that keep other writers out while
still letting readers open the file. POSIX uses flock(2), which conflicts
between separate open descriptors even inside a single process; Windows
locks the first byte through msvcrt.
"""

import os
from typing import BinaryIO

from levelog.domain.errors import FileAcquisitionError

if os.name == "nt":
    import msvcrt
else:
    import fcntl


def lock_exclusive(handle: BinaryIO, path: str) -> None:
    """
    Take an exclusive lock on an open file without waiting.

    Args:
        handle: Binary file object opened for writing.
        path: Path of the handle, used in the error message.

    Raises:
        FileAcquisitionError: If another descriptor already holds the lock.
    """
    try:
        if os.name == "nt":
            handle.seek(0)
            msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
        else:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError as e:
        raise FileAcquisitionError(path, e.strerror or "locked by another writer") from e


def unlock(handle: BinaryIO) -> None:
    """Release a lock taken by lock_exclusive. Closing the handle also releases it."""
    if os.name == "nt":
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
