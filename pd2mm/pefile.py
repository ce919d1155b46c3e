"""Reading and patching the headers and sections of PE executables."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar, TypeVar


class PEError(Exception):
    """Base error for PE file handling."""


class InvalidOffsetError(PEError, ValueError):
    """An offset or byte range falls outside the data."""

    def __init__(self, message: str = "invalid offset or byte range") -> None:
        super().__init__(message)


class SectionHeaderSizeZeroError(PEError):
    """The file has no section headers."""

    def __init__(self) -> None:
        super().__init__("section header size is 0")


class SectionNotFoundError(PEError, LookupError):
    """No section contains the requested address."""

    def __init__(self) -> None:
        super().__init__("section is nil")


class BytesNotFoundError(PEError, LookupError):
    """The searched-for bytes do not occur."""

    def __init__(self) -> None:
        super().__init__("no bytes")


COFF_START_BYTES = b"PE\x00\x00"
COFF_START_BYTES_LEN = 4
COFF_HEADER_SIZE = 20

# Optional header size without the magic number and the data directory.
OH64_BYTE_SIZE = 110

DATA_DIR_SIZE = 128
DATA_DIR_ENTRY_SIZE = 8

# Section header size without the name and characteristics.
SH32_BYTE_SIZE = 28
SH32_ENTRY_SIZE = 64
SH32_NAME_SIZE = 8
SH32_CHARACTERISTICS_SIZE = 4

_DD_START = COFF_START_BYTES_LEN + COFF_HEADER_SIZE + OH64_BYTE_SIZE
_SH_START = _DD_START + DATA_DIR_SIZE

_FILE_HEADER = struct.Struct("<HHIIIHH")
_SECTION_HEADER = struct.Struct("<8sIIIIIIHHI")


@dataclass
class PESection:
    """A section as described by its section header."""

    name: str
    virtual_size: int
    virtual_address: int
    size: int
    offset: int
    characteristics: int = 0


@dataclass
class PEData:
    """The raw bytes of a PE file together with its parsed sections."""

    data: bytes
    sections: list[PESection] = field(default_factory=list)
    machine: int = 0


@dataclass
class DataDir:
    """A data directory entry."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<II")
    va: int
    size: int


@dataclass
class Import:
    """An import descriptor."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<5I")
    characteristics: int
    timedatestamp: int
    forwarder_chain: int
    name: int
    fthunk: int


@dataclass
class Thunk:
    """An import thunk."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<II")
    function: int
    data_addr: int


@dataclass
class EncBlock:
    """An encrypted block descriptor."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<9IQI")
    va: int
    raw_size: int
    virtual_size: int
    unk: int
    crc: int
    unk2: int
    crc2: int
    pad: int
    file_offset: int
    pad2: int
    pad3: int


@dataclass
class OoaSection:
    """Contents of the protection section."""

    content_id: str
    oep: int
    enc_blocks: list[EncBlock]
    image_base: int
    size_of_image: int
    import_dir: DataDir
    iat_dir: DataDir
    reloc_dir: DataDir


_R = TypeVar("_R", DataDir, Import, Thunk, EncBlock)


def _read_record(stream: BinaryIO, cls: type[_R]) -> _R:
    size = cls.FORMAT.size
    raw = stream.read(size)
    if len(raw) != size:
        raise EOFError(f"expected {size} bytes, got {len(raw)}")
    return cls(*cls.FORMAT.unpack(raw))


def _slice(data: bytes, start: int, end: int) -> bytes:
    if start < 0 or start > end or end > len(data):
        raise InvalidOffsetError()
    return bytes(data[start:end])


def parse_pe(data: bytes) -> PEData:
    """Parse the file and section headers of a PE image held in memory."""
    data = bytes(data)
    base = 0
    if data[:2] == b"MZ":
        if len(data) < 0x40:
            raise PEError("truncated DOS header")
        signature_offset = struct.unpack_from("<I", data, 0x3C)[0]
        if data[signature_offset : signature_offset + 4] != COFF_START_BYTES:
            raise PEError("invalid PE signature")
        base = signature_offset + 4
    try:
        machine, count, _, _, _, optional_size, _ = _FILE_HEADER.unpack_from(data, base)
    except struct.error as exc:
        raise PEError("truncated file header") from exc

    start = base + _FILE_HEADER.size + optional_size
    sections = []
    for index in range(count):
        try:
            fields = _SECTION_HEADER.unpack_from(data, start + index * _SECTION_HEADER.size)
        except struct.error as exc:
            raise PEError("truncated section header") from exc
        name, vsize, vaddr, raw_size, raw_ptr, _, _, _, _, chars = fields
        sections.append(
            PESection(
                name=name.rstrip(b"\x00").decode("utf-8", errors="replace"),
                virtual_size=vsize,
                virtual_address=vaddr,
                size=raw_size,
                offset=raw_ptr,
                characteristics=chars,
            )
        )
    return PEData(data=data, sections=sections, machine=machine)


def open_pe(path: str | os.PathLike[str]) -> PEData:
    """Read and parse the PE file at path."""
    with open(path, "rb") as file:
        return parse_pe(file.read())


def write_bytes(data: bytearray, offset: int, replace: bytes) -> None:
    """Overwrite data at offset with replace, in place."""
    if offset < 0 or offset + len(replace) > len(data):
        raise InvalidOffsetError()
    data[offset : offset + len(replace)] = replace


def find_bytes(src: bytes, dest: bytes) -> int:
    """Return the index of the first occurrence of dest in src."""
    index = bytes(src).find(bytes(dest))
    if index < 0:
        raise BytesNotFoundError()
    return index


def match_bytes(src: bytes, dest: bytes) -> bool:
    """Return True if src starts with dest."""
    return bytes(src[: len(dest)]) == bytes(dest)


def pad_bytes(data: bytes, size: int) -> bytes:
    """Return data padded with zero bytes up to size."""
    if len(data) < size:
        return bytes(data) + bytes(size - len(data))
    return bytes(data)


def read_coff_header_offset(data: bytes) -> int:
    """Return the offset of the PE signature."""
    return find_bytes(data, COFF_START_BYTES)


def read_dd_bytes(data: bytes) -> bytes:
    """Return the bytes of the data directory."""
    start = read_coff_header_offset(data) + _DD_START
    return _slice(data, start, start + DATA_DIR_SIZE)


def read_dd_entry_offset(data: bytes, addr: int, size: int) -> int:
    """Return the file offset of the data directory entry (addr, size)."""
    directory = read_dd_bytes(data)
    rva = find_bytes(directory, DataDir.FORMAT.pack(addr, size))
    return read_coff_header_offset(data) + _DD_START + rva


def read_sh_size(pe: PEData) -> int:
    """Return the size reserved for all section headers."""
    size = len(pe.sections) * SH32_ENTRY_SIZE
    if size == 0:
        raise SectionHeaderSizeZeroError()
    return size


def read_sh_bytes(data: bytes, size: int) -> bytes:
    """Return size bytes starting at the section headers."""
    start = read_coff_header_offset(data) + _SH_START
    return _slice(data, start, start + size)


def read_sh_entry_offset(data: bytes, address: int) -> int:
    """Return the file offset of address within the section headers."""
    return read_coff_header_offset(data) + _SH_START + address


def read_section_bytes(pe: PEData, virtual_address: int, size: int) -> bytes:
    """Return size bytes of the section data at virtual_address."""
    section = next(
        (
            s
            for s in pe.sections
            if s.virtual_address <= virtual_address < s.virtual_address + s.size
        ),
        None,
    )
    if section is None:
        raise SectionNotFoundError()
    offset = virtual_address - section.virtual_address + section.offset
    return _slice(pe.data, offset, offset + size)


def read_import(stream: BinaryIO) -> Import:
    """Read an import descriptor."""
    return _read_record(stream, Import)


def read_thunk(stream: BinaryIO) -> Thunk:
    """Read an import thunk."""
    return _read_record(stream, Thunk)


def read_data_dir(stream: BinaryIO) -> DataDir:
    """Read a data directory entry."""
    return _read_record(stream, DataDir)


def read_enc_block(stream: BinaryIO) -> EncBlock:
    """Read an encrypted block descriptor."""
    return _read_record(stream, EncBlock)