"""JSON access to files bundled under a root directory or package resource."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol, Union

from pd2mm.filesystem import bytes_to_map as _bytes_to_map


class _Node(Protocol):
    def __truediv__(self, child: str) -> "_Node": ...

    def read_bytes(self) -> bytes: ...


_Root = Union[str, "os.PathLike[str]", _Node]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def _parts(name: str) -> list[str]:
    if name == ".":
        return []
    parts = name.split("/")
    if any(part in ("", ".", "..") for part in parts):
        raise ValueError(f"invalid path: {name!r}")
    return parts


class EmbeddedFileSystem:
    """Reads JSON files named by slash paths prefixed with `initial` below `root`."""

    def __init__(self, initial: str, root: _Root) -> None:
        self.initial = initial
        self.root: _Node = Path(root) if isinstance(root, (str, os.PathLike)) else root

    def _read(self, name: str) -> bytes:
        node = self.root
        for part in _parts(self.initial + name):
            node = node / part
        return node.read_bytes()

    def bytes_to_map(self, data: bytes | str) -> dict[str, Any]:
        """Decode a JSON object."""
        return _bytes_to_map(data)

    def filename_to_map(self, name: str) -> dict[str, Any]:
        """Read a bundled file and decode it as a JSON object."""
        return _bytes_to_map(self._read(name))

    def filename_to_bytes(self, name: str) -> bytes:
        """Read a bundled file, checking that it holds valid JSON."""
        data = self._read(name)
        try:
            json.loads(data, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ValueError(f"invalid JSON format: {exc}") from exc
        return data