"""Conversion of text to UTF-16 little-endian bytes."""

from __future__ import annotations

import re

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def utf8_to_utf16(text: str | bytes) -> bytes:
    """Encode text as UTF-16 little-endian, replacing invalid input with U+FFFD."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    text = _LONE_SURROGATE.sub("\ufffd", text)
    return text.encode("utf-16-le")