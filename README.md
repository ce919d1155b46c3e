# pd2mm

Small, self-contained utilities for working with game files and mod
directories.

## Modules

- `pd2mm.filesystem` – path normalisation (`normalize`, `trim_path`,
  `combine`, `get_file_name`, ...), checks for problematic install locations
  (`check_path_for_problem_locations`, `default_problem_paths`), copying
  (`copy`, `copy_file`, `copy_and_rename`), listing (`get_files`,
  `get_directories`, `get_top_files`, `get_top_directories`), cleaning up
  (`delete_directory`, `delete_empty_directories`, `clear_read_only_attr`),
  JSON helpers (`bytes_to_map`, `filename_to_map`, `filename_to_bytes`) and
  `is_valid_hostname`.
- `pd2mm.embedded` – `EmbeddedFileSystem`, reading JSON files below a root
  directory or package resource.
- `pd2mm.ringbuffer` – `LineRingBuffer`, a thread-safe writer that keeps the
  last N complete lines.
- `pd2mm.binio` – `BinaryReader` and `BinaryWriter` for little-endian
  integers, plus `FileEntry`, `DataEntry`, `find_by_hash` and
  `find_by_file_name`.
- `pd2mm.pefile` – parsing PE section headers (`open_pe`, `parse_pe`),
  locating the data directory and section headers, reading section bytes and
  fixed-layout records (`read_import`, `read_thunk`, `read_data_dir`,
  `read_enc_block`), and byte search/patch helpers.
- `pd2mm.utf` – `utf8_to_utf16`, encoding text as UTF-16 little-endian.
- `pd2mm.download` – HTTP downloads with optional SHA-256 validation
  (`download`, `file_download`, `file_validated`, `file_with_bytes`,
  `file_with_context`, ...).
- `pd2mm.msgpack_io` – msgpack encoding and decoding, and converting between
  JSON files and msgpack.
- `pd2mm.logger` – `MultiLogger`, writing each line to several streams;
  `shared_logger` and `register_logger` manage a shared instance.
- `pd2mm.ansi` – ANSI escape sequences for cursor movement and line erasing,
  and `ansi_print`/`ansi_printf`/`ansi_println`.
- `pd2mm.benchmark` – `timer` and `timer_with_result`, reporting elapsed time
  as a duration string such as `1.5ms`.
- `pd2mm.safe` – bounds-checked slicing that ends the program on failure, or
  reports to a callback of your choice.
- `pd2mm.process` – `exists` and `run_process` for finding and running
  external programs.
- `pd2mm.errors` – `MError`, an exception with a header, message and cause.

## Examples

Checking a chosen install location:

```python
from pd2mm.filesystem import check_path_for_problem_locations

check = check_path_for_problem_locations("C:/Users/me/Downloads/game")
if check is not None:
    print(check.action.value, check.target)   # Deny Downloads
```

Keeping the last lines of output:

```python
from pd2mm.ringbuffer import LineRingBuffer

buf = LineRingBuffer(2)
buf.write("one\ntwo\nthree\npartial")
print(str(buf))   # "two\nthree\n"
```

Reading little-endian values:

```python
from pd2mm.binio import BinaryReader, BinaryWriter

with BinaryWriter("data.bin") as out:
    out.write_uint32(7)
    out.write_uint64(1 << 40)

with BinaryReader("data.bin") as src:
    print(src.read_uint32(), src.read_uint64(), src.size())
```

Listing the sections of a PE file:

```python
from pd2mm.pefile import open_pe

pe = open_pe("game.exe")
for section in pe.sections:
    print(section.name, hex(section.virtual_address), section.size)
```

Downloading a file and checking its SHA-256:

```python
from pd2mm.download import file_validated

file_validated("https://example.com/archive.zip", "<sha256 hex>", "archive.zip", "cache")
```

Timing a call:

```python
from pd2mm.benchmark import timer_with_result

result = timer_with_result(lambda: sum(range(10_000)), "sum", print)
```

## What this package does not do

It has no MurmurHash3 implementation, no AES or DLF decryption, no
cipher-tag decoding, no file checksum helpers (MD5, SHA, CRC) and no
comparison of two directories by file hashes. It offers no command-line
program or user interface; everything here is a library to import.

## Installation and tests

Install the project directory with pip. The `test` extra pulls in pytest and
responses; the tests in `tests/` run under pytest.