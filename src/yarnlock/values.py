"""Scalar value types for lockfile tokens and parsed leaves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class VInt:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class VString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


class _Absent:
    """Singleton for a token that carries no scalar payload."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Absent"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "void"


Absent = _Absent()

ScalarValue = Union[VInt, VString, VBool, _Absent]


def to_text(value: ScalarValue) -> str:
    """Render a scalar the way it would read in a JSON dump of the document."""
    return str(value)
