"""Exception hierarchy for lockfile parsing and encoding."""

from __future__ import annotations


class LockfileError(Exception):
    """Base class for every error raised by yarnlock.

    ``line`` and ``column`` point at the offending token when known;
    ``file_loc`` names the source the text came from.
    """

    label = "LockfileError"

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        file_loc: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.file_loc = file_loc

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class TokenizeError(LockfileError):
    """Odd indentation, a bad quoted string, or an unrecognised character."""

    label = "TokenizeError"


class ParseError(LockfileError):
    """Unexpected token, missing key, or a lockfile version that is too new."""

    label = "ParseError"


class EncodeError(LockfileError):
    """The output writer failed while a document was being encoded."""

    label = "EncodeError"
