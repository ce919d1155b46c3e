"""Download files over HTTP, optionally checking their SHA-256 hash."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional

import requests

from pd2mm.logger import shared_logger

_CHUNK = 1 << 20

Validator = Callable[[str, str, str], None]


class DownloadError(Exception):
    """Base error for downloads."""


class DownloadURLEmptyError(DownloadError, ValueError):
    """No URL was given."""

    def __init__(self) -> None:
        super().__init__("download url is empty")


class DownloadPathEmptyError(DownloadError, ValueError):
    """No destination directory was given."""

    def __init__(self) -> None:
        super().__init__("download path is empty")


class DownloadNameEmptyError(DownloadError, ValueError):
    """No destination file name was given."""

    def __init__(self) -> None:
        super().__init__("download name is empty")


class FileHashMismatchError(DownloadError):
    """A file's SHA-256 hash differs from the expected one."""

    def __init__(self, message: str = "file hash does not match") -> None:
        super().__init__(message)


@dataclass
class Messenger:
    """Callbacks told about download progress."""

    start_download: Callable[[str], object]


def default_download_messenger() -> Messenger:
    """Return a messenger that logs each download start."""
    return Messenger(
        start_download=lambda name: shared_logger().infof("%s ... DOWNLOADING", name)
    )


def default_hash_validator(path: str, hash_value: str, name: str) -> None:
    """Raise FileHashMismatchError unless the file at path has the given SHA-256 hash."""
    try:
        with open(path, "rb") as file:
            digest = hashlib.sha256(file.read()).hexdigest()
    except OSError as exc:
        raise FileHashMismatchError() from exc
    if hash_value.lower() != digest:
        raise FileHashMismatchError()
    shared_logger().infof("%s ... OK", name)


def _validate_params(url: str, path: str, name: str) -> None:
    if not url:
        raise DownloadURLEmptyError()
    if not path:
        raise DownloadPathEmptyError()
    if not name:
        raise DownloadNameEmptyError()


def _read(path: str, name: str) -> bytes:
    with open(os.path.join(path, name), "rb") as file:
        return file.read()


def _write(response: requests.Response, out: BinaryIO, hash_value: str, name: str, skip: bool) -> None:
    sha = hashlib.sha256()
    for chunk in response.iter_content(chunk_size=_CHUNK):
        if not chunk:
            continue
        out.write(chunk)
        sha.update(chunk)
    if skip:
        return
    if hash_value.lower() != sha.hexdigest():
        raise FileHashMismatchError(f"hash mismatch for {name}")


def file_with_context(
    messenger: Messenger,
    url: str,
    hash_value: str,
    name: str,
    path: str,
    validator: Optional[Validator],
) -> None:
    """Download url to path/name unless validator accepts the file already there.

    With a validator the downloaded bytes must match hash_value.
    """
    _validate_params(url, path, name)

    target = os.path.join(path, name)
    os.makedirs(os.path.dirname(target), mode=0o700, exist_ok=True)

    if validator is not None:
        try:
            validator(target, hash_value, name)
        except Exception:
            pass
        else:
            return

    messenger.start_download(name)

    with requests.get(url, stream=True) as response, open(target, "wb") as out:
        _write(response, out, hash_value, name, skip=validator is None)


def file_with_context_and_bytes(
    messenger: Messenger,
    url: str,
    hash_value: str,
    name: str,
    path: str,
    validator: Optional[Validator],
) -> bytes:
    """Download like file_with_context and return the file's contents."""
    file_with_context(messenger, url, hash_value, name, path, validator)
    return _read(path, name)


def file_download(url: str, name: str, path: str) -> None:
    """Download url to path/name."""
    file_with_context(default_download_messenger(), url, "", name, path, None)


def file_validated(url: str, hash_value: str, name: str, path: str) -> None:
    """Download url to path/name, requiring the given SHA-256 hash."""
    file_with_context(
        default_download_messenger(), url, hash_value, name, path, default_hash_validator
    )


def file_with_bytes(url: str, name: str, path: str) -> bytes:
    """Download url to path/name and return the contents."""
    return file_with_context_and_bytes(default_download_messenger(), url, "", name, path, None)


def file_with_bytes_validated(url: str, hash_value: str, name: str, path: str) -> bytes:
    """Download url to path/name with hash checking and return the contents."""
    return file_with_context_and_bytes(
        default_download_messenger(), url, hash_value, name, path, default_hash_validator
    )


def download_with_messenger(messenger: Messenger, url: str) -> bytes:
    """Download url and return the body."""
    if not url:
        raise DownloadURLEmptyError()
    messenger.start_download(url)
    response = requests.get(url)
    return response.content


def download(url: str) -> bytes:
    """Download url with the default messenger and return the body."""
    return download_with_messenger(default_download_messenger(), url)