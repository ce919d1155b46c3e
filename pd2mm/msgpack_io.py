"""Convert between JSON files and the msgpack format."""

from __future__ import annotations

import base64
import json
import math
from typing import Any

import msgpack

from pd2mm.filesystem import read_file

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def msgpack_encode(value: Any) -> bytes:
    """Encode a value in the msgpack format."""
    return msgpack.packb(value, use_bin_type=True)


def msgpack_decode(data: bytes) -> Any:
    """Decode msgpack data into Python values."""
    try:
        return msgpack.unpackb(bytes(data), raw=False, strict_map_key=False)
    except (msgpack.exceptions.UnpackException, ValueError) as exc:
        raise ValueError(f"invalid msgpack data: {exc}") from exc


def msgpack_encode_file(name: str) -> bytes:
    """Read a JSON file and encode its value in msgpack; numbers become floats."""
    text = read_file(name).decode("utf-8", errors="replace")
    value = None if not text.strip() else json.loads(text, parse_int=float)
    return msgpack_encode(value)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def msgpack_decode_file(name: str) -> str:
    """Read a msgpack file and return its value as indented JSON."""
    value = msgpack_decode(read_file(name))
    text = json.dumps(
        _jsonable(value), indent=" ", sort_keys=True, ensure_ascii=False, allow_nan=False
    )
    for raw, escaped in _JSON_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text