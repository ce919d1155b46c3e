"""Path helpers, problem-location checks and file and directory utilities."""

from __future__ import annotations

import json
import os
import posixpath
import re
import shutil
import stat
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any, Callable, Iterable, Iterator


class NoNameFoundError(LookupError):
    """None of the files contain the name to be replaced."""

    def __init__(self) -> None:
        super().__init__("name could not be found in file path")


class NoPathFoundError(LookupError):
    """A renamed file does not contain the path to be replaced."""

    def __init__(self) -> None:
        super().__init__("file path could not be found in file name")


class DestinationExistsError(FileExistsError):
    """The destination of a copy already exists."""

    def __init__(self) -> None:
        super().__init__("file exists in destination path")


class PathCheckType(str, Enum):
    """How a problem path is matched."""

    ENDS_WITH = "EndsWith"
    CONTAINS = "Contains"
    DRIVE_ROOT = "DriveRoot"


class PathCheckAction(str, Enum):
    """What to do when a problem path is matched."""

    WARN = "Warn"
    DENY = "Deny"


@dataclass(frozen=True)
class PathCheck:
    """A path pattern that is known to cause trouble."""

    type: PathCheckType
    target: str
    action: PathCheckAction


def _ends(target: str, action: PathCheckAction) -> PathCheck:
    return PathCheck(PathCheckType.ENDS_WITH, target, action)


def _contains(target: str, action: PathCheckAction) -> PathCheck:
    return PathCheck(PathCheckType.CONTAINS, target, action)


_WARN = PathCheckAction.WARN
_DENY = PathCheckAction.DENY

_DEFAULT_PROBLEM_PATHS: tuple[PathCheck, ...] = (
    _ends("SteamApps", _WARN),
    _ends("Documents", _WARN),
    _ends("Desktop", _DENY),
    _contains("Desktop", _WARN),
    _contains("scoped_dir", _DENY),
    _contains("Downloads", _DENY),
    _contains("OneDrive", _DENY),
    _contains("NextCloud", _DENY),
    _contains("DropBox", _DENY),
    _contains("Google", _DENY),
    _contains("Program Files", _DENY),
    _contains("Program Files (x86)", _DENY),
    PathCheck(PathCheckType.DRIVE_ROOT, "", _DENY),
    # Reserved device names.
    *(_ends(word, _DENY) for word in ("CON", "PRN", "AUX", "CLOCK$", "NUL")),
    *(_ends(f"COM{digit}", _DENY) for digit in range(10)),
    *(_ends(f"LPT{digit}", _DENY) for digit in range(10)),
)

RESERVED_HOSTNAMES: tuple[str, ...] = (
    *(f"COM{digit}" for digit in range(1, 10)),
    *(f"LPT{digit}" for digit in range(1, 10)),
    "PRN",
    "AUX",
    "NUL",
)

_DRIVE_ROOT = re.compile(r"^\w:(\\|/)$", re.ASCII)
_HOSTNAME = re.compile(r"[a-zA-Z0-9-]+")
_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def default_problem_paths() -> list[PathCheck]:
    """Return the default list of problematic paths, in checking order."""
    return list(_DEFAULT_PROBLEM_PATHS)


def normalize(path: str) -> str:
    """Replace every backslash with a forward slash."""
    return path.replace("\\", "/")


def normalize_all(paths: Iterable[str]) -> list[str]:
    """Normalize every path in paths."""
    return [normalize(path) for path in paths]


def to_normalized_list(path: str) -> list[str]:
    """Normalize path and split it on forward slashes."""
    return normalize(path).split("/")


def check_path_for_problem_locations(path: str) -> PathCheck | None:
    """Return the first problem check that path matches, or None."""
    path = normalize(trim_path(path)).lower()
    parts = path.split("/")

    for check in _DEFAULT_PROBLEM_PATHS:
        target = check.target.lower()
        if check.type is PathCheckType.ENDS_WITH and parts[-1] == target:
            return check
        if check.type is PathCheckType.CONTAINS and target in parts:
            return check
        if check.type is PathCheckType.DRIVE_ROOT and _DRIVE_ROOT.match(path):
            return check
    return None


def _clean(path: str) -> str:
    cleaned = os.path.normpath(path)
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _join(*parts: str) -> str:
    joined = os.sep.join(part for part in parts if part)
    return _clean(joined) if joined else ""


def _last_sep(name: str) -> int:
    return max(name.rfind(sep) for sep in _SEPARATORS)


def _dir(name: str) -> str:
    head = name[: _last_sep(name) + 1]
    return _clean(head) if head else "."


def _base(name: str) -> str:
    if not name:
        return "."
    stripped = name.rstrip("".join(_SEPARATORS))
    if not stripped:
        return os.sep
    return stripped[_last_sep(stripped) + 1 :]


def _ext(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot > _last_sep(name) else ""


def combine(path_a: str, *args: str) -> str:
    """Join paths, skipping empty ones, and clean the result."""
    return _join(path_a, *args)


def from_cwd(*args: str) -> str:
    """Join paths onto the current working directory."""
    return _join(os.getcwd(), *args)


def get_directory_name(name: str) -> str:
    """Return everything but the last element of name."""
    return _dir(name)


def get_file_name(name: str) -> str:
    """Return the last element of name without its extension."""
    base = _base(name)
    ext = _ext(name)
    return base[: -len(ext)] if ext and base.endswith(ext) else base


def get_file_extension(name: str) -> str:
    """Return the extension of name, including the dot."""
    return _ext(name)


def get_relative_path(*args: str) -> str:
    """Build a "./"-rooted slash path from the given elements."""
    if not args:
        raise ValueError("at least one path is required")
    result = "./" + args[0]
    for element in args[1:]:
        result = posixpath.normpath("/".join(part for part in (result, element) if part))
    return result


def trim_path(path: str) -> str:
    """Strip one leading "./" or "/", or else one trailing "/." or "/"."""
    if path.startswith(("./", ".\\")):
        return path[2:]
    if path.startswith(("/", "\\")):
        return path[1:]
    if path.endswith(("/.", "\\.")):
        return path[:-2]
    if path.endswith(("/", "\\")):
        return path[:-1]
    return path


def _make_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def copy(src: str, dest: str) -> None:
    """Copy a file, symlink or whole directory tree from src to dest."""
    if os.path.islink(src):
        _make_parent(dest)
        os.symlink(os.readlink(src), dest)
    elif os.path.isdir(src):
        shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=True)
    else:
        _make_parent(dest)
        shutil.copy(src, dest)


def copy_file(src: str, dest: str) -> None:
    """Copy the contents of the file src into dest."""
    shutil.copyfile(src, dest)


def copy_and_rename(
    files: Iterable[str], old_path: str, new_path: str, old_name: str, new_name: str
) -> None:
    """Copy files under new_path, replacing old_name with new_name in their paths."""
    files = list(files)
    if not any(old_name in file for file in files):
        raise NoNameFoundError()

    trimmed = trim_path(old_path)
    for file in files:
        renamed = file.replace(old_name, new_name)
        if trimmed not in renamed:
            raise NoPathFoundError()
        target = renamed.replace(trimmed, new_path)
        if exists(target):
            raise DestinationExistsError()
        copy(file, target)


def exists(name: str) -> bool:
    """Return False only when name definitely does not exist."""
    try:
        os.stat(name)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def read_file(name: str) -> bytes:
    """Return the contents of the file name."""
    with open(name, "rb") as file:
        return file.read()


def read_all_string_lines(text: str) -> list[str]:
    """Split text into lines, dropping line endings and empty lines."""
    lines = (line[:-1] if line.endswith("\r") else line for line in text.split("\n"))
    return [line for line in lines if line]


def read_all_lines(file: IO[Any]) -> list[str]:
    """Read the rest of an open file as non-empty lines."""
    content = file.read()
    if isinstance(content, (bytes, bytearray)):
        content = bytes(content).decode("utf-8", errors="replace")
    return read_all_string_lines(content)


def write_file(name: str, data: bytes, perm: int = 0o644) -> None:
    """Write data to name, creating it with perm or truncating it."""
    fd = os.open(name, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
    with os.fdopen(fd, "wb") as file:
        file.write(data)


def write_lines_to_file(file: IO[Any], entries: Iterable[Any]) -> None:
    """Write each entry to an open file as is."""
    for entry in entries:
        file.write(entry)


def overwrite_file(file: IO[Any]) -> None:
    """Empty an open file and rewind it."""
    file.truncate(0)
    file.seek(0)


def delete_base_directory(name: str) -> None:
    """Remove name and everything below it; a missing path is not an error."""
    if os.path.isdir(name) and not os.path.islink(name):
        shutil.rmtree(name)
        return
    try:
        os.remove(name)
    except FileNotFoundError:
        pass


def _walk(root: str) -> Iterator[tuple[str, bool]]:
    """Yield (path, is_directory) for root and everything below it, in lexical order."""
    is_dir = stat.S_ISDIR(os.lstat(root).st_mode)
    yield root, is_dir
    if is_dir:
        for name in sorted(os.listdir(root)):
            yield from _walk(os.path.join(root, name))


def delete_directory(name: str, skip: Callable[[str], bool]) -> None:
    """Remove every file below name for which skip returns False, keeping directories."""
    for path, is_dir in _walk(name):
        if path != name and not is_dir and not skip(path):
            os.remove(path)


def delete_empty_directories(directory: str) -> list[OSError]:
    """Remove empty directories below directory, deepest first; return the errors met."""
    try:
        directories = [path for path, is_dir in _walk(directory) if is_dir and path != directory]
    except OSError as exc:
        return [exc]

    errors: list[OSError] = []
    for path in reversed(directories):
        try:
            if is_empty(path):
                os.rmdir(path)
        except OSError as exc:
            errors.append(exc)
    return errors


def clear_read_only_attr(root: str) -> None:
    """Make root and everything below it writable by its owner."""
    for path, _ in _walk(root):
        mode = os.stat(path).st_mode
        if not mode & stat.S_IWUSR:
            os.chmod(path, stat.S_IMODE(mode) | stat.S_IWUSR)


def sort_file_names(paths: list[str]) -> list[str]:
    """Sort paths in place by parent directory, then by name, and return them."""
    paths.sort(key=lambda path: (_dir(path), _base(path)))
    return paths


def _collect(path: str, want_dirs: bool) -> list[str]:
    try:
        found = [entry for entry, is_dir in _walk(path) if is_dir == want_dirs]
    except OSError:
        return []
    return sort_file_names(found)


def get_files(path: str) -> list[str]:
    """Return every file below path, sorted; empty if the walk fails."""
    return _collect(path, want_dirs=False)


def get_directories(path: str) -> list[str]:
    """Return path and every directory below it, sorted; empty if the walk fails."""
    return _collect(path, want_dirs=True)


def _top_entries(path: str, want_dirs: bool) -> list[str]:
    with os.scandir(path) as entries:
        names = [
            entry.name for entry in entries if entry.is_dir(follow_symlinks=False) == want_dirs
        ]
    return sorted(names)


def get_top_directories(path: str) -> list[str]:
    """Return the names of the directories directly inside path."""
    return _top_entries(path, want_dirs=True)


def get_top_files(path: str) -> list[str]:
    """Return the names of the non-directories directly inside path."""
    return _top_entries(path, want_dirs=False)


def is_empty(path: str) -> bool:
    """Return True if the directory path has no entries."""
    with os.scandir(path) as entries:
        return next(entries, None) is None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def _loads(data: bytes | str) -> Any:
    return json.loads(data, parse_constant=_reject_constant)


def _to_map(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"cannot decode JSON {type(value).__name__} into a map")
    return value


def bytes_to_map(data: bytes | str) -> dict[str, Any]:
    """Decode a JSON object."""
    return _to_map(_loads(data))


def filename_to_map(initial: str, name: str) -> dict[str, Any]:
    """Read the file initial+name and decode it as a JSON object."""
    return bytes_to_map(read_file(initial + name))


def filename_to_bytes(initial: str, name: str) -> bytes:
    """Read the file initial+name, checking that it holds valid JSON."""
    data = read_file(initial + name)
    try:
        _loads(data)
    except ValueError as exc:
        raise ValueError(f"invalid JSON format: {exc}") from exc
    return data


def is_valid_hostname(hostname: str) -> bool:
    """Return True if hostname is 1-15 letters, digits or dashes and not reserved."""
    if not 1 <= len(hostname) <= 15:
        return False
    if not _HOSTNAME.fullmatch(hostname):
        return False
    return not any(hostname.upper() == reserved for reserved in RESERVED_HOSTNAMES)