"""Recursive-descent parser: token stream to nested mappings keyed by indentation."""

from __future__ import annotations

import logging
import re
from typing import Union

from .errors import ParseError
from .tokenizer import Token, TokenKind
from .values import ScalarValue, VString

logger = logging.getLogger(__name__)

LOCKFILE_VERSION = 1

_VERSION_RE = re.compile(r"^yarn lockfile v(\d+)$")

_VALUE_KINDS = (TokenKind.Boolean, TokenKind.String, TokenKind.Number)

Node = Union[ScalarValue, "Mapping"]
Mapping = dict[ScalarValue, Node]


class Parser:
    """Parses one token list; ``comments`` collects every comment body seen.

    Usage::

        parser = Parser(tokenize(text), file_loc="yarn.lock")
        parser.next()
        tree = parser.parse(0)
    """

    def __init__(self, tokens: list[Token], file_loc: str = "lockfile") -> None:
        self.tokens = tokens
        self.file_loc = file_loc
        self.comments: list[str] = []
        self.token: Token | None = None
        self._ptr = 0

    # -- Cursor ---------------------------------------------------------

    def next(self) -> Token:
        """Advance to the next non-comment token and make it current."""
        while True:
            if self._ptr >= len(self.tokens):
                raise ParseError("No more tokens", file_loc=self.file_loc)
            tk = self.tokens[self._ptr]
            self._ptr += 1
            if tk.kind is TokenKind.Comment:
                self._on_comment(tk)
                continue
            self.token = tk
            return tk

    def _on_comment(self, token: Token) -> None:
        if not token.is_string():
            raise ParseError(
                "expected token value to be a string",
                line=token.line,
                column=token.column,
                file_loc=self.file_loc,
            )
        comment = token.value.value.strip()

        match = _VERSION_RE.match(comment)
        if match:
            version = int(match.group(1))
            logger.debug("lockfile declares version %d", version)
            if version > LOCKFILE_VERSION:
                raise ParseError(
                    f"Can't install from a lockfile of version {version} as you're "
                    f"on an old yarn version that only supports versions up to "
                    f"{LOCKFILE_VERSION}. Run `$ yarn self-update` to upgrade to "
                    f"the latest version.",
                    line=token.line,
                    column=token.column,
                    file_loc=self.file_loc,
                )
        self.comments.append(comment)

    def unexpected(self, msg: str = "Unexpected token") -> ParseError:
        tk = self.token
        return ParseError(
            f"{msg} {tk.line}:{tk.column} in {self.file_loc}",
            line=tk.line,
            column=tk.column,
            file_loc=self.file_loc,
        )

    def eat(self, kind: TokenKind) -> bool:
        if self.token.kind is kind:
            self.next()
            return True
        return False

    # -- Grammar --------------------------------------------------------

    def _key(self) -> ScalarValue:
        key = self.token.value
        if not isinstance(key, VString):
            raise self.unexpected("Expected a key")
        self.next()
        return key

    def parse(self, indent: int = 0) -> Mapping:
        """Collect the properties of one block at *indent* depth.

        Returns when a line starts at a shallower depth or input ends; the
        token that ended the block stays current for the caller.
        """
        obj: Mapping = {}

        while True:
            tk = self.token

            if tk.kind is TokenKind.NewLine:
                nxt = self.next()
                if indent == 0:
                    # top level ignores whatever follows a line break
                    continue
                if nxt.kind is not TokenKind.Indent:
                    break
                if nxt.value.value == indent:
                    self.next()
                else:
                    break

            elif tk.kind is TokenKind.Indent:
                if tk.value.value == indent:
                    self.next()
                else:
                    break

            elif tk.kind is TokenKind.EndOfInput:
                break

            elif tk.kind is TokenKind.String:
                keys = [self._key()]
                while self.token.kind is TokenKind.Comma:
                    self.next()
                    if self.token.kind is not TokenKind.String:
                        raise self.unexpected("Expected string")
                    keys.append(self._key())

                was_colon = self.eat(TokenKind.Colon)

                if self.token.kind in _VALUE_KINDS:
                    for key in keys:
                        obj[key] = self.token.value
                    self.next()
                elif was_colon:
                    value = self.parse(indent + 1)
                    for key in keys:
                        obj[key] = value
                    if indent != 0 and self.token.kind is not TokenKind.Indent:
                        break
                else:
                    raise self.unexpected("Invalid value type")

            else:
                raise self.unexpected(f"Unknown token: {tk}")

        return obj


def parse_tokens(tokens: list[Token], file_loc: str = "lockfile") -> tuple[Mapping, list[str]]:
    """Parse a complete token list; returns the root mapping and the comments."""
    parser = Parser(tokens, file_loc=file_loc)
    parser.next()
    tree = parser.parse(0)
    return tree, parser.comments
