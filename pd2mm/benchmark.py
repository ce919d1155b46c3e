"""Timing helpers that report how long a call took."""

from __future__ import annotations

import time
from typing import Callable, TypeVar

T = TypeVar("T")


def _fraction(ns: int, unit: int) -> str:
    whole, rest = divmod(ns, unit)
    digits = len(str(unit)) - 1
    frac = str(rest).zfill(digits).rstrip("0")
    return f"{whole}.{frac}" if frac else str(whole)


def format_duration(seconds: float) -> str:
    """Render a duration the way Go's time.Duration prints it."""
    ns = round(seconds * 1_000_000_000)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{_fraction(ns, 1_000)}µs"
    if ns < 1_000_000_000:
        return f"{sign}{_fraction(ns, 1_000_000)}ms"
    hours, rest = divmod(ns, 3_600 * 1_000_000_000)
    minutes, rest = divmod(rest, 60 * 1_000_000_000)
    text = f"{_fraction(rest, 1_000_000_000)}s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return sign + text


def timer_with_result(
    fn: Callable[[], T], method_name: str, caller: Callable[[str, str], object]
) -> T:
    """Call fn, report the elapsed time to caller, and return fn's result."""
    start = time.perf_counter()
    try:
        return fn()
    finally:
        caller(method_name, format_duration(time.perf_counter() - start))


def timer(
    fn: Callable[[], object], method_name: str, caller: Callable[[str, str], object]
) -> None:
    """Call fn and report the elapsed time to caller."""
    timer_with_result(fn, method_name, caller)