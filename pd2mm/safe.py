"""Bounds-checked access to sequences that ends the program on failure."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from pd2mm.logger import shared_logger

T = TypeVar("T")


def _default_caller(msg: str) -> None:
    shared_logger().fatal(msg)


def has_index(seq: Sequence[T], value: T) -> int:
    """Return the index of value in seq; exit the program if it is absent."""
    try:
        return list(seq).index(value)
    except ValueError:
        shared_logger().fatalf("%s expected %s but it was not found (index -1)", seq, value)
        return -1


def range_with_caller(
    parts: Sequence[T], start: int, end: int, caller: Callable[[str], object]
) -> Sequence[T] | None:
    """Return parts[start:end], or report to caller and return None if out of bounds."""
    if start < 0 or end > len(parts) or start > end:
        caller(f"invalid slice bounds: start={start}, end={end}, len={len(parts)}")
        return None
    return parts[start:end]


def slice_with_caller(parts: Sequence[T], index: int, caller: Callable[[str], object]) -> T:
    """Return parts[index], reporting to caller if out of bounds."""
    result = range_with_caller(parts, index, index + 1, caller)
    if result is None:
        raise IndexError(f"index {index} out of range for length {len(parts)}")
    return result[0]


def range_of(parts: Sequence[T], start: int, end: int) -> Sequence[T] | None:
    """Return parts[start:end]; exit the program if out of bounds."""
    return range_with_caller(parts, start, end, _default_caller)


def slice_at(parts: Sequence[T], index: int) -> T:
    """Return parts[index]; exit the program if out of bounds."""
    return slice_with_caller(parts, index, _default_caller)