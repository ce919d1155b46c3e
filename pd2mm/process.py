"""Look up and run external programs."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path


def exists(name: str) -> bool:
    """Return True if name can be found as an executable."""
    return shutil.which(name) is not None


def _executable_dir() -> Path:
    return Path(sys.argv[0] or sys.executable).resolve().parent


def run_process(name: str, hide: bool, rel: bool, redirect: bool, *args: str) -> None:
    """Run a program and wait for it, raising on failure.

    With rel the name is resolved next to the running program; with redirect
    the child's output goes to this process's streams, otherwise it is discarded;
    hide suppresses the console window on Windows.
    """
    path = str(_executable_dir() / name) if rel else name
    output = None if redirect else subprocess.DEVNULL

    options: dict = {}
    if os.name == "nt":
        startupinfo = subprocess.STARTUPINFO()
        if hide:
            startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
            startupinfo.wShowWindow = 0
        options["startupinfo"] = startupinfo

    subprocess.run([path, *args], stdout=output, stderr=output, check=True, **options)