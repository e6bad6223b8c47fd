"""Append-only file log shared by the whole application."""

from __future__ import annotations

import sys
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import IO, Optional

DEFAULT_LOG_PATH = "output.log"
_OPEN_ERROR = "Ошибка, открытия файла журнала: "


class LogLevel(Enum):
    """Severity of a log record."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Logger:
    """Writes timestamped lines to a file opened in append mode."""

    def __init__(self, path: str | Path = DEFAULT_LOG_PATH) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._file: Optional[IO[str]]
        try:
            self._file = open(self.path, "a", encoding="utf-8")
        except OSError:
            self._file = None
            print(_OPEN_ERROR, file=sys.stderr)

    @property
    def is_open(self) -> bool:
        return self._file is not None and not self._file.closed

    def log(self, level: LogLevel, message: str) -> None:
        """Append one line of the form ``date time [LEVEL] message``."""
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"{stamp} [{LogLevel(level).value}] {message}\n"
        with self._lock:
            if not self.is_open:
                print(_OPEN_ERROR, file=sys.stderr)
                return
            assert self._file is not None
            self._file.write(line)
            self._file.flush()

    def close(self) -> None:
        """Close the underlying file; later records go to nowhere."""
        with self._lock:
            if self._file is not None and not self._file.closed:
                self._file.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


_instance: Optional[Logger] = None
_instance_lock = threading.Lock()


def get_logger() -> Logger:
    """Return the process-wide logger writing to ``output.log``."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = Logger(DEFAULT_LOG_PATH)
        return _instance