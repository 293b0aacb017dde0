"""yarnlock — lossless parser and encoder for yarn v1 lockfiles."""

from .document import Entry, LockFile, dump, load, parse_lockfile
from .encoder import encode, encode_to_string
from .errors import EncodeError, LockfileError, ParseError, TokenizeError
from .formatter import maybe_wrap
from .parser import LOCKFILE_VERSION, Parser, parse_tokens
from .tokenizer import Token, TokenKind, Tokenizer, tokenize
from .values import Absent, ScalarValue, VBool, VInt, VString

__all__ = [
    "parse_lockfile",
    "load",
    "dump",
    "Entry",
    "LockFile",
    "encode",
    "encode_to_string",
    "maybe_wrap",
    "tokenize",
    "Tokenizer",
    "Token",
    "TokenKind",
    "Parser",
    "parse_tokens",
    "LOCKFILE_VERSION",
    "Absent",
    "ScalarValue",
    "VBool",
    "VInt",
    "VString",
    "LockfileError",
    "TokenizeError",
    "ParseError",
    "EncodeError",
]
