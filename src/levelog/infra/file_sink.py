from __future__ import annotations

"""
Exclusive File Sink.

Owns one log file per Logger. Acquisition walks the candidate names
logs/<program>.log, logs/<program>1.log, ... until it finds one no other
writer holds, truncates it, and starts a background thread that flushes the
buffered writes at a fixed interval. When every candidate is taken the sink
stays disabled and the Logger carries on with console output only.
"""

import logging
import sys
import threading
from typing import BinaryIO, Optional

from levelog.domain.constants import (
    DEFAULT_FLUSH_INTERVAL_MS,
    DEFAULT_LOG_DIR,
    DEFAULT_MAX_SUFFIX,
    LINE_TERMINATOR,
    LOG_FILE_ENCODING,
)
from levelog.infra.fs import ensure_dir, get_log_file_path
from levelog.infra.locking import lock_exclusive, unlock

logger = logging.getLogger(__name__)


class FileSink:
    """
    Process-exclusive log file with periodic flushing.

    Append, flush and close are serialized by one lock, so the background
    flush can run while emission calls are in progress on other threads.
    """

    def __init__(
            self,
            log_dir: str = DEFAULT_LOG_DIR,
            flush_interval_ms: int = DEFAULT_FLUSH_INTERVAL_MS,
            max_suffix: int = DEFAULT_MAX_SUFFIX,
    ):
        self.log_dir = log_dir
        self.flush_interval_ms = flush_interval_ms
        self.max_suffix = max_suffix

        self._lock = threading.Lock()
        self._handle: Optional[BinaryIO] = None
        self._path: Optional[str] = None
        self._stop_event: Optional[threading.Event] = None
        self._flush_thread: Optional[threading.Thread] = None

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._handle is not None

    @property
    def path(self) -> Optional[str]:
        return self._path

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def initialize(self, program_name: str) -> bool:
        """
        Acquire a log file for the given program, replacing any previous one.

        The previous flush thread and handle are released first. Failures are
        reported on stderr and leave the sink disabled; nothing is raised.

        Args:
            program_name: Stem of the log file name.

        Returns:
            bool: True if a file was acquired.
        """
        self.close()

        try:
            ensure_dir(self.log_dir)
        except OSError as e:
            sys.stderr.write(f"Could not create log directory '{self.log_dir}': {e}\n")
            return False

        attempts = 0
        for index in range(self.max_suffix + 1):
            candidate = get_log_file_path(self.log_dir, program_name, index)
            try:
                handle = self._open_exclusive(candidate)
            except OSError as e:
                # Locked by another writer (or refused): move on to the next suffix
                attempts += 1
                logger.debug(f"FileSink: {candidate} unavailable ({e}), trying next suffix.")
                continue

            with self._lock:
                self._handle = handle
                self._path = candidate
            self._start_flush_thread()
            logger.debug(f"FileSink: Acquired {candidate} after {attempts} failed attempt(s).")
            return True

        base_path = get_log_file_path(self.log_dir, program_name)
        sys.stderr.write(f"After {attempts} attempts, could not access file {base_path}, giving up.\n")
        return False

    def close(self) -> None:
        """Stop the flush thread, then flush, unlock and close the handle. Idempotent."""
        self._stop_flush_thread()

        with self._lock:
            handle = self._handle
            self._handle = None
            self._path = None
            if handle is None:
                return
            try:
                handle.flush()
                unlock(handle)
            except OSError as e:
                logger.warning(f"FileSink: Error while releasing log file: {e}")
            finally:
                handle.close()

    # -------------------------------------------------------------------------
    # WRITES
    # -------------------------------------------------------------------------

    def append(self, line: str) -> None:
        """
        Write one line plus terminator, UTF-8 encoded, to the buffered handle.

        Does nothing when no file is held.

        Raises:
            OSError: If the underlying write fails.
        """
        data = (line + LINE_TERMINATOR).encode(LOG_FILE_ENCODING)
        with self._lock:
            if self._handle is None:
                return
            self._handle.write(data)

    def flush_now(self) -> None:
        """Push buffered writes to the operating system."""
        with self._lock:
            if self._handle is not None:
                self._handle.flush()

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    @staticmethod
    def _open_exclusive(path: str) -> BinaryIO:
        # Opened without truncation: emptying the file is only allowed once
        # the lock proves no other writer is using it.
        handle = open(path, "ab")
        try:
            lock_exclusive(handle, path)
            handle.seek(0)
            handle.truncate()
        except BaseException:
            handle.close()
            raise
        return handle

    def _start_flush_thread(self) -> None:
        stop_event = threading.Event()
        thread = threading.Thread(
            target=self._flush_loop,
            args=(stop_event, self.flush_interval_ms / 1000.0),
            name=f"levelog-flush[{self._path}]",
            daemon=True,
        )
        self._stop_event = stop_event
        self._flush_thread = thread
        thread.start()

    def _stop_flush_thread(self) -> None:
        stop_event, thread = self._stop_event, self._flush_thread
        self._stop_event = None
        self._flush_thread = None
        if stop_event is None:
            return
        stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _flush_loop(self, stop_event: threading.Event, interval: float) -> None:
        # First flush happens right away, then once per interval
        while True:
            try:
                self.flush_now()
            except Exception as e:
                logger.warning(f"FileSink: Periodic flush failed: {e}")
            if stop_event.wait(interval):
                return
