"""Error carrying a header, a message and an underlying cause."""

from __future__ import annotations


class MError(Exception):
    """An error with a header, a message and the error that caused it."""

    def __init__(self, header: str, message: str, err: BaseException | None) -> None:
        super().__init__(header, message, err)
        self.header = header
        self.message = message
        self.err = err
        self.__cause__ = err

    def __str__(self) -> str:
        return f"[{self.header}] {self.message}\n- {self.err}"