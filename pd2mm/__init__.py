"""Utilities for filesystem work, binary I/O, PE inspection, downloads, msgpack and terminal output."""

__version__ = "0.1.0"