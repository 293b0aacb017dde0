"""LockFile — the typed result of parsing a yarn v1 lockfile."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import IO

from . import encoder
from .errors import EncodeError, ParseError, TokenizeError
from .parser import Mapping, parse_tokens
from .tokenizer import tokenize
from .values import to_text

logger = logging.getLogger(__name__)

# Lockfile field name -> Entry attribute, in the order the encoder writes them.
FIELD_NAMES = {
    "name": "name",
    "version": "version",
    "uid": "uid",
    "resolved": "resolved",
    "integrity": "integrity",
    "registry": "registry",
    "dependencies": "dependencies",
    "optionalDependencies": "optional_dependencies",
}

_MAP_FIELDS = ("dependencies", "optionalDependencies")


@dataclass
class Entry:
    """One package record; equal entries share a key line when encoded."""

    name: str | None = None
    version: str | None = None
    uid: str | None = None
    resolved: str | None = None
    integrity: str | None = None
    registry: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    optional_dependencies: dict[str, str] = field(default_factory=dict)

    # -- Conversion -----------------------------------------------------

    def to_dict(self) -> dict[str, str | dict[str, str]]:
        """Lockfile field names to values; unset fields and empty maps left out."""
        out: dict[str, str | dict[str, str]] = {}
        for lock_name, attr in FIELD_NAMES.items():
            value = getattr(self, attr)
            if value is None or value == {}:
                continue
            out[lock_name] = dict(value) if isinstance(value, dict) else value
        return out

    def signature(self) -> tuple:
        """Hashable form of the entry content, used to group equal entries."""
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, dict):
                value = tuple(sorted(value.items()))
            parts.append(value)
        return tuple(parts)

    @classmethod
    def from_mapping(cls, key: str, mapping: Mapping, file_loc: str = "lockfile") -> Entry:
        """Build an Entry from one parsed block; unknown fields are ignored."""
        entry = cls()
        for raw_name, value in mapping.items():
            lock_name = to_text(raw_name)
            attr = FIELD_NAMES.get(lock_name)
            if attr is None:
                continue
            if lock_name in _MAP_FIELDS:
                setattr(entry, attr, _string_map(key, lock_name, value, file_loc))
            elif isinstance(value, dict):
                raise ParseError(
                    f"parse failed: {key}: field {lock_name!r} must be a string",
                    file_loc=file_loc,
                )
            else:
                setattr(entry, attr, to_text(value))
        return entry


def _string_map(key: str, lock_name: str, value, file_loc: str) -> dict[str, str]:
    if not isinstance(value, dict):
        raise ParseError(
            f"parse failed: {key}: field {lock_name!r} must be a mapping",
            file_loc=file_loc,
        )
    result: dict[str, str] = {}
    for dep, spec in value.items():
        if isinstance(spec, dict):
            raise ParseError(
                f"parse failed: {key}: {lock_name}.{to_text(dep)} must be a string",
                file_loc=file_loc,
            )
        result[to_text(dep)] = to_text(spec)
    return result


# ---------------------------------------------------------------------------
# LockFile
# ---------------------------------------------------------------------------

class LockFile(dict[str, Entry]):
    """Mapping of ``name@range`` keys to entries.

    ``comments`` holds the comment lines seen while parsing (header
    included). Keys that shared one line in the source are separate keys
    here with equal entries.
    """

    def __init__(self, *args, comments: list[str] | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.comments: list[str] = list(comments or [])

    @classmethod
    def from_tree(
        cls, tree: Mapping, comments: list[str] | None = None, file_loc: str = "lockfile"
    ) -> LockFile:
        lockfile = cls(comments=comments)
        for raw_key, block in tree.items():
            key = to_text(raw_key)
            if not isinstance(block, dict):
                raise ParseError(
                    f"parse failed: top-level key {key!r} must hold a block",
                    file_loc=file_loc,
                )
            lockfile[key] = Entry.from_mapping(key, block, file_loc)
        return lockfile

    def root_entries(self) -> list[str]:
        """Sorted keys that no entry's ``dependencies`` refers to."""
        referenced = {
            f"{dep}@{spec}"
            for entry in self.values()
            for dep, spec in entry.dependencies.items()
        }
        return sorted(key for key in self if key not in referenced)

    def to_dict(self) -> dict[str, dict]:
        return {key: entry.to_dict() for key, entry in self.items()}

    def encode(self, writer: IO[str]) -> None:
        encoder.encode(self, writer)

    def to_string(self) -> str:
        return encoder.encode_to_string(self)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def parse_lockfile(data: str | bytes, file_loc: str = "lockfile") -> LockFile:
    """Parse lockfile text into a :class:`LockFile`.

    Raises :class:`TokenizeError` or :class:`ParseError`; nothing is
    returned for input that fails at any stage.
    """
    try:
        text = data.decode("utf-8") if isinstance(data, bytes) else data
        tree, comments = parse_tokens(tokenize(text), file_loc=file_loc)
        lockfile = LockFile.from_tree(tree, comments, file_loc)
    except UnicodeDecodeError as exc:
        raise ParseError(f"parse failed: {exc}", file_loc=file_loc) from exc
    except (TokenizeError, ParseError) as exc:
        if exc.file_loc is None:
            exc.file_loc = file_loc
        raise
    logger.debug("parsed %d entries from %s", len(lockfile), file_loc)
    return lockfile


def load(path: str | Path) -> LockFile:
    path = Path(path)
    return parse_lockfile(path.read_bytes(), file_loc=str(path))


def dump(lockfile: LockFile, path: str | Path) -> None:
    try:
        fh = open(path, "w", encoding="utf-8", newline="")
    except OSError as exc:
        raise EncodeError(f"cannot open {path}: {exc}") from exc
    with fh:
        lockfile.encode(fh)

