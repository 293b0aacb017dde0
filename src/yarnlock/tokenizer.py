"""Tokenizer: turns lockfile text into a flat stream of positioned tokens."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .errors import TokenizeError
from .values import Absent, ScalarValue, VBool, VInt, VString

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[0-9]+")
BARE_START_RE = re.compile(r"[a-zA-Z/.-]")

# Characters that end a bare (unquoted) token.
BARE_DELIMITERS = frozenset(": \r\n,")


class TokenKind(Enum):
    Boolean = auto()
    String = auto()
    Identifier = auto()
    EndOfInput = auto()
    Colon = auto()
    NewLine = auto()
    Comment = auto()
    Indent = auto()
    Invalid = auto()
    Number = auto()
    Comma = auto()


@dataclass(frozen=True, slots=True)
class Token:
    line: int
    column: int
    kind: TokenKind
    value: ScalarValue = Absent

    def is_string(self) -> bool:
        return isinstance(self.value, VString)

    def __str__(self) -> str:
        return f"{self.kind.name}({self.value!r}) at {self.line}:{self.column}"


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

@dataclass
class Tokenizer:
    """Stateful scanner; one instance per input text."""

    line: int = 1
    column: int = 0
    last_newline: bool = False

    def _build(self, kind: TokenKind, value: ScalarValue = Absent) -> Token:
        return Token(line=self.line, column=self.column, kind=kind, value=value)

    def _fail(self, message: str) -> TokenizeError:
        return TokenizeError(message, line=self.line, column=self.column)

    def tokens(self, text: str) -> Iterator[Token]:
        """Yield tokens for *text*, ending with a single EndOfInput token.

        Raises :class:`TokenizeError` at the first position no rule accepts.
        """
        pos = 0
        n = len(text)

        while pos < n:
            ch = text[pos]
            chop = 0

            if ch == "\n" or ch == "\r":
                chop = 1
                if pos + 1 < n and text[pos + 1] == "\n":
                    chop = 2
                self.line += 1
                self.column = 0
                yield self._build(TokenKind.NewLine)

            elif ch == "#":
                end = text.find("\n", pos + 1)
                if end == -1:
                    end = n
                yield self._build(TokenKind.Comment, VString(text[pos + 1:end]))
                chop = end - pos

            elif ch == " ":
                if self.last_newline:
                    end = pos
                    while end < n and text[end] == " ":
                        end += 1
                    width = end - pos
                    if width % 2 == 1:
                        raise self._fail("Invalid number of spaces")
                    yield self._build(TokenKind.Indent, VInt(width // 2))
                    chop = width
                else:
                    chop = 1

            elif ch == '"':
                end = pos + 1
                while end < n:
                    if text[end] == '"':
                        escaped = text[end - 1] == "\\" and text[end - 2] != "\\"
                        if not escaped:
                            end += 1
                            break
                    end += 1
                raw = text[pos:end]
                try:
                    decoded = json.loads(raw)
                except ValueError as exc:
                    raise self._fail(f"Invalid quoted string {raw!r}") from exc
                if not isinstance(decoded, str):
                    raise self._fail(f"Invalid quoted string {raw!r}")
                yield self._build(TokenKind.String, VString(decoded))
                chop = end - pos

            elif "0" <= ch <= "9":
                digits = _NUMBER_RE.match(text, pos).group()
                yield self._build(TokenKind.Number, VInt(int(digits)))
                chop = len(digits)

            elif text.startswith("true", pos):
                yield self._build(TokenKind.Boolean, VBool(True))
                chop = 4

            # Suffix test on the remaining input, not a word match.
            elif n - pos >= 5 and text.endswith("false"):
                yield self._build(TokenKind.Boolean, VBool(False))
                chop = 5

            elif ch == ":":
                yield self._build(TokenKind.Colon)
                chop = 1

            elif ch == ",":
                yield self._build(TokenKind.Comma)
                chop = 1

            elif BARE_START_RE.match(ch):
                end = pos
                while end < n and text[end] not in BARE_DELIMITERS:
                    end += 1
                yield self._build(TokenKind.String, VString(text[pos:end]))
                chop = end - pos

            else:
                raise self._fail(f"Unexpected character {ch!r}")

            self.column += chop
            self.last_newline = ch == "\n" or (
                ch == "\r" and pos + 1 < n and text[pos + 1] == "\n"
            )
            pos += chop

        yield self._build(TokenKind.EndOfInput)


def tokenize(text: str) -> list[Token]:
    """Tokenize *text* in full; raises :class:`TokenizeError` on bad input."""
    result = list(Tokenizer().tokens(text))
    logger.debug("tokenized %d characters into %d tokens", len(text), len(result))
    return result
