"""Append-only file sink with a line prefix of write time and call site."""

import logging
import os
import threading
from datetime import datetime

from flarelog.errors import SinkError

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "./logs.log"
FILE_MODE = 0o644


class FileSink:
    def __init__(self, path: str = DEFAULT_LOG_FILE, time_func=None):
        self._path = path
        self._time_func = time_func or datetime.now
        self._lock = threading.Lock()
        self._file = None
        self._open()

    @property
    def path(self) -> str:
        return self._path

    def _open(self):
        try:
            fd = os.open(self._path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, FILE_MODE)
            self._file = os.fdopen(fd, "a", encoding="utf-8", errors="backslashreplace")
        except OSError as e:
            raise SinkError(f"opening log file {self._path} failed: {e}") from e
        logger.debug("Opened log file %s", self._path)

    def _prefix(self, filename: str, lineno: int) -> str:
        now = self._time_func()
        return now.strftime("%Y/%m/%d %H:%M:%S.%f") + f" {filename}:{lineno}:"

    def write_line(self, line: str, filename: str = "???", lineno: int = 0) -> None:
        """Append one prefixed line. *filename*/*lineno* name the log call site."""
        entry = f"{self._prefix(filename, lineno)} {line}"
        with self._lock:
            if self._file is None or self._file.closed:
                raise SinkError(f"log file {self._path} is closed")
            try:
                self._file.write(entry if entry.endswith("\n") else entry + "\n")
                self._file.flush()
            except (OSError, ValueError) as e:
                raise SinkError(f"writing log file {self._path} failed: {e}") from e

    def close(self):
        with self._lock:
            if self._file and not self._file.closed:
                self._file.close()
                logger.debug("Closed log file %s", self._path)
