import os
import time
import threading
from collections import deque


class EventLogger:
    """Thread-safe log of ring membership events.

    The most recent events are kept in memory. When ``log_path`` is given,
    every event is also appended to that file, and :meth:`sync` picks up
    lines appended by other loggers sharing the same file.
    """

    def __init__(self, log_path: str | None = None, *, max_events: int = 1000) -> None:
        self.log_path = log_path
        self._lock = threading.Lock()
        self._events = deque(maxlen=max_events)
        self._fp = None
        self._read_pos = 0
        if log_path is not None:
            directory = os.path.dirname(log_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            # allow reading appended lines from other loggers
            self._fp = open(log_path, "a+", encoding="utf-8")
            self._fp.seek(0, os.SEEK_END)
            self._read_pos = self._fp.tell()

    def close(self) -> None:
        """Close the underlying log file, if any.

        A logger backed by a file refuses further :meth:`log` calls once
        closed, so no event is kept in memory without reaching the file.
        """
        with self._lock:
            if self._fp is not None:
                self._fp.close()
                self._fp = None

    def log(self, message: str) -> None:
        """Record ``message`` with a timestamp."""
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        entry = f"[{timestamp}] {message}"
        with self._lock:
            if self.log_path is not None and self._fp is None:
                raise ValueError(f"event log {self.log_path!r} is closed")
            if self._fp is not None:
                # keep foreign lines ordered before our own entry
                self._read_new_lines()
                self._fp.write(entry + "\n")
                self._fp.flush()
                self._read_pos = self._fp.tell()
            self._events.append(entry)

    def sync(self) -> None:
        """Read any new log lines written by other loggers."""
        with self._lock:
            if self._fp is not None:
                self._read_new_lines()

    def _read_new_lines(self) -> None:
        self._fp.flush()
        self._fp.seek(self._read_pos)
        for line in self._fp:
            self._events.append(line.rstrip("\n"))
        self._read_pos = self._fp.tell()
        self._fp.seek(0, os.SEEK_END)

    def get_events(self, offset: int = 0, limit: int | None = None) -> list[str]:
        """Return recent entries stored in memory, oldest first."""
        with self._lock:
            entries = list(self._events)
        if offset < 0:
            offset = 0
        end = offset + limit if limit is not None else None
        return entries[offset:end]
