"""Little-endian binary file reader and writer, plus archive entry records."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterable

_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


def _read_exact(file: BinaryIO, size: int) -> bytes:
    data = file.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def _size_of(file: BinaryIO) -> int:
    current = file.tell()
    try:
        return file.seek(0, os.SEEK_END)
    finally:
        file.seek(current, os.SEEK_SET)


class BinaryReader:
    """Reads little-endian values from a file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file: BinaryIO = open(path, "rb")

    def read_uint32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return _U32.unpack(_read_exact(self._file, _U32.size))[0]

    def read_uint64(self) -> int:
        """Read an unsigned 64-bit integer."""
        return _U64.unpack(_read_exact(self._file, _U64.size))[0]

    def read(self, size: int) -> bytes:
        """Read up to size bytes."""
        return self._file.read(size)

    def read_char(self) -> int:
        """Read a single byte and return its value."""
        return _read_exact(self._file, 1)[0]

    def seek(self, position: int, whence: int = os.SEEK_SET) -> int:
        """Move to position relative to whence and return the new position."""
        return self._file.seek(position, whence)

    def seek_from_beginning(self, position: int) -> int:
        """Move to position counted from the start of the file."""
        return self._file.seek(position, os.SEEK_SET)

    def seek_from_end(self, position: int) -> int:
        """Move to position counted from the end of the file."""
        return self._file.seek(position, os.SEEK_END)

    def seek_from_current(self, position: int) -> int:
        """Move by position from the current offset."""
        return self._file.seek(position, os.SEEK_CUR)

    def position(self) -> int:
        """Return the current offset."""
        return self._file.tell()

    def size(self) -> int:
        """Return the file size, leaving the position unchanged."""
        return _size_of(self._file)

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> BinaryReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class BinaryWriter:
    """Writes little-endian values to a file."""

    def __init__(self, path: str | os.PathLike[str], append_mode: bool = False) -> None:
        self._file: BinaryIO = open(path, "ab" if append_mode else "wb")

    def write_uint32(self, value: int) -> None:
        """Write an unsigned 32-bit integer."""
        self._file.write(_U32.pack(value))

    def write_uint64(self, value: int) -> None:
        """Write an unsigned 64-bit integer."""
        self._file.write(_U64.pack(value))

    def write(self, data: bytes) -> int:
        """Write raw bytes and return how many were written."""
        return self._file.write(data)

    def write_char(self, text: str) -> int:
        """Write text as UTF-8 and return the number of bytes written."""
        return self._file.write(text.encode("utf-8"))

    def seek(self, position: int, whence: int = os.SEEK_SET) -> int:
        """Move to position relative to whence and return the new position."""
        return self._file.seek(position, whence)

    def seek_from_beginning(self, position: int) -> int:
        """Move to position counted from the start of the file."""
        return self._file.seek(position, os.SEEK_SET)

    def seek_from_end(self, position: int) -> int:
        """Move to position counted from the end of the file."""
        return self._file.seek(position, os.SEEK_END)

    def seek_from_current(self, position: int) -> int:
        """Move by position from the current offset."""
        return self._file.seek(position, os.SEEK_CUR)

    def position(self) -> int:
        """Return the current offset."""
        return self._file.tell()

    def size(self) -> int:
        """Return the file size, leaving the position unchanged."""
        self._file.flush()
        return _size_of(self._file)

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> BinaryWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


@dataclass
class FileEntry:
    """A file stored in an archive."""

    file_name: str
    file_name_lower: int
    file_name_upper: int
    offset: int
    uncomp_size: int


@dataclass
class DataEntry:
    """A file name together with its hash."""

    hash: int
    file_name: str


def find_by_hash(entries: Iterable[DataEntry], hash_value: int) -> DataEntry | None:
    """Return the first entry with the given hash, or None."""
    return next((entry for entry in entries if entry.hash == hash_value), None)


def find_by_file_name(entries: Iterable[DataEntry], name: str) -> DataEntry | None:
    """Return the first entry with the given file name, or None."""
    return next((entry for entry in entries if entry.file_name == name), None)