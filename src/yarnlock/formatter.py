"""Scalar formatting: decide whether a value may be written bare or must be quoted."""

from __future__ import annotations

import json

from .tokenizer import BARE_DELIMITERS, BARE_START_RE


def needs_quotes(value: str) -> bool:
    """True when *value* would not tokenize back to itself as a bare token.

    The checks mirror the tokenizer's rules for unquoted text: the first
    character must start a bare identifier, no delimiter may occur inside,
    and the text must not be read as a boolean. A digit-led value fails the
    first check, which keeps numbers quoted.
    """
    if not value or not BARE_START_RE.match(value[0]):
        return True
    if any(ch in BARE_DELIMITERS for ch in value):
        return True
    # the tokenizer matches ``true`` as a prefix
    return value.startswith("true") or value.startswith("false")


def quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def maybe_wrap(value: str | int | bool) -> str:
    """Return the textual token for *value*.

    >>> maybe_wrap("foo")
    'foo'
    >>> maybe_wrap("1.2.3")
    '"1.2.3"'
    """
    if isinstance(value, (bool, int)):
        return quote(str(value).lower() if isinstance(value, bool) else str(value))
    if needs_quotes(value):
        return quote(value)
    return value
