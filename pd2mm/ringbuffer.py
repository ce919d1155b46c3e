"""A thread-safe writer that keeps only the last complete lines written to it."""

from __future__ import annotations

import threading
from collections import deque


class LineRingBuffer:
    """Keeps the most recent `capacity` complete lines; partial lines wait for a newline."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._lock = threading.Lock()
        self._lines: deque[str] = deque(maxlen=capacity)
        self._pending = bytearray()

    def write(self, data: bytes | str) -> int:
        """Append data, storing every line it completes; return its length."""
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        with self._lock:
            self._pending.extend(raw)
            *complete, rest = self._pending.split(b"\n")
            self._lines.extend(line.decode("utf-8", errors="replace") for line in complete)
            self._pending = bytearray(rest)
        return len(data)

    def __str__(self) -> str:
        with self._lock:
            return "".join(line + "\n" for line in self._lines)

    def reset(self) -> None:
        """Drop all stored lines and any partial line."""
        with self._lock:
            self._lines.clear()
            self._pending.clear()