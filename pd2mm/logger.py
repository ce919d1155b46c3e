"""Logger that fans every message out to several writers."""

from __future__ import annotations

import json
import sys
import time
from enum import IntEnum
from typing import Any, TextIO


class Level(IntEnum):
    """Severity of a log message."""

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8
    FATAL = 12


_LABELS = {
    Level.DEBUG: "DEBU",
    Level.INFO: "INFO",
    Level.WARN: "WARN",
    Level.ERROR: "ERRO",
    Level.FATAL: "FATA",
}


def _timestamp() -> str:
    """Return the current time in the short "3:04PM" style."""
    stamp = time.strftime("%I:%M%p")
    return stamp[1:] if stamp.startswith("0") else stamp


def _format_value(value: Any) -> str:
    text = str(value)
    if not text or any(ch.isspace() or ch in '="' for ch in text):
        return json.dumps(text, ensure_ascii=False)
    return text


def _format_pairs(pairs: tuple[Any, ...]) -> str:
    items = list(pairs)
    if len(items) % 2:
        items.append("MISSING_VALUE")
    keys = items[0::2]
    values = items[1::2]
    return " ".join(f"{key}={_format_value(value)}" for key, value in zip(keys, values))


class MultiLogger:
    """Writes each log line to every registered writer."""

    def __init__(self, *args: TextIO) -> None:
        self.writers: list[TextIO] = list(args)
        self.level: Level = Level.INFO

    def _emit(self, label: str | None, msg: Any, pairs: tuple[Any, ...]) -> None:
        parts = [_timestamp()]
        if label is not None:
            parts.append(label)
        parts.append(str(msg))
        if pairs:
            parts.append(_format_pairs(pairs))
        line = " ".join(part for part in parts if part) + "\n"
        for writer in self.writers:
            writer.write(line)
            flush = getattr(writer, "flush", None)
            if flush is not None:
                flush()

    def _log(self, level: Level, msg: Any, pairs: tuple[Any, ...]) -> None:
        if level >= self.level:
            self._emit(_LABELS[level], msg, pairs)

    def debug(self, msg: Any, *args: Any) -> None:
        """Write a DEBUG message with key/value pairs."""
        self._log(Level.DEBUG, msg, args)

    def debugf(self, fmt: str, *args: Any) -> None:
        """Write a DEBUG message built from a printf-style format."""
        self._log(Level.DEBUG, fmt % args if args else fmt, ())

    def info(self, msg: Any, *args: Any) -> None:
        """Write an INFO message with key/value pairs."""
        self._log(Level.INFO, msg, args)

    def infof(self, fmt: str, *args: Any) -> None:
        """Write an INFO message built from a printf-style format."""
        self._log(Level.INFO, fmt % args if args else fmt, ())

    def warn(self, msg: Any, *args: Any) -> None:
        """Write a WARN message with key/value pairs."""
        self._log(Level.WARN, msg, args)

    def warnf(self, fmt: str, *args: Any) -> None:
        """Write a WARN message built from a printf-style format."""
        self._log(Level.WARN, fmt % args if args else fmt, ())

    def error(self, msg: Any, *args: Any) -> None:
        """Write an ERROR message with key/value pairs."""
        self._log(Level.ERROR, msg, args)

    def errorf(self, fmt: str, *args: Any) -> None:
        """Write an ERROR message built from a printf-style format."""
        self._log(Level.ERROR, fmt % args if args else fmt, ())

    def fatal(self, msg: Any, *args: Any) -> None:
        """Write an ERROR message, then exit with status 1."""
        self._log(Level.ERROR, msg, args)
        raise SystemExit(1)

    def fatalf(self, fmt: str, *args: Any) -> None:
        """Write a formatted ERROR message, then exit with status 1."""
        self._log(Level.ERROR, fmt % args if args else fmt, ())
        raise SystemExit(1)

    def print(self, msg: Any, *args: Any) -> None:
        """Write a message with no level, regardless of the level filter."""
        self._emit(None, msg, args)

    def printf(self, fmt: str, *args: Any) -> None:
        """Write a formatted message with no level."""
        self._emit(None, fmt % args if args else fmt, ())


_shared: MultiLogger | None = None


def register_logger(*args: TextIO) -> MultiLogger:
    """Replace the shared logger with one writing to the given writers."""
    global _shared
    _shared = MultiLogger(*args)
    return _shared


def shared_logger() -> MultiLogger:
    """Return the shared logger, writing to standard output by default."""
    global _shared
    if _shared is None:
        _shared = MultiLogger(sys.stdout)
    return _shared