"""ANSI escape sequences for cursor movement and line erasing, plus printing helpers."""

from __future__ import annotations

import sys
from typing import Any, TextIO


def _out(stream: TextIO | None) -> TextIO:
    return sys.stdout if stream is None else stream


def cursor_up(n: int, stream: TextIO | None = None) -> None:
    """Move the cursor n cells up."""
    _out(stream).write(f"\x1b[{n}A")


def cursor_down(n: int, stream: TextIO | None = None) -> None:
    """Move the cursor n cells down."""
    _out(stream).write(f"\x1b[{n}B")


def cursor_forward(n: int, stream: TextIO | None = None) -> None:
    """Move the cursor n cells right."""
    _out(stream).write(f"\x1b[{n}C")


def cursor_back(n: int, stream: TextIO | None = None) -> None:
    """Move the cursor n cells left."""
    _out(stream).write(f"\x1b[{n}D")


def cursor_next_line(n: int, stream: TextIO | None = None) -> None:
    """Move the cursor to the start of the line n lines down."""
    _out(stream).write(f"\x1b[{n}E")


def cursor_previous_line(n: int, stream: TextIO | None = None) -> None:
    """Move the cursor to the start of the line n lines up."""
    _out(stream).write(f"\x1b[{n}F")


def cursor_horizontal_absolute(x: int, stream: TextIO | None = None) -> None:
    """Move the cursor to column x."""
    _out(stream).write(f"\x1b[{x}G")


def cursor_show(stream: TextIO | None = None) -> None:
    """Show the cursor."""
    _out(stream).write("\x1b[?25h")


def cursor_hide(stream: TextIO | None = None) -> None:
    """Hide the cursor."""
    _out(stream).write("\x1b[?25l")


def erase_in_line(mode: int, stream: TextIO | None = None) -> None:
    """Erase part of the current line according to mode."""
    _out(stream).write(f"\x1b[{mode}K")


def ansi_stdout() -> TextIO:
    """Return the stream that escape-aware output goes to."""
    return sys.stdout


def ansi_stderr() -> TextIO:
    """Return the error stream for escape-aware output."""
    return sys.stderr


def _join_print(args: tuple[Any, ...]) -> str:
    # A space goes between two operands only when neither is a string.
    pieces: list[str] = []
    previous_is_str = True
    for index, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if index and not is_str and not previous_is_str:
            pieces.append(" ")
        pieces.append(str(arg))
        previous_is_str = is_str
    return "".join(pieces)


def _write(text: str) -> int:
    ansi_stdout().write(text)
    return len(text.encode("utf-8"))


def ansi_print(*args: Any) -> int:
    """Print the arguments and return the number of bytes written."""
    return _write(_join_print(args))


def ansi_printf(fmt: str, *args: Any) -> int:
    """Print a printf-style formatted string and return the bytes written."""
    return _write(fmt % args if args else fmt)


def ansi_println(*args: Any) -> int:
    """Print the arguments separated by spaces, then a newline."""
    return _write(" ".join(str(arg) for arg in args) + "\n")