"""Encoder: serialise a typed lockfile back to yarn v1 text."""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

from .errors import EncodeError
from .formatter import maybe_wrap
from .parser import LOCKFILE_VERSION

if TYPE_CHECKING:
    from .document import Entry

logger = logging.getLogger(__name__)

INDENT = "  "

HEADER = (
    "# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.",
    f"# yarn lockfile v{LOCKFILE_VERSION}",
)


# ---------------------------------------------------------------------------
# Line builders
# ---------------------------------------------------------------------------

def encode_map(mapping: dict[str, str], name: str, indent: str = "") -> list[str]:
    """Render a ``name:`` block with one sorted ``key value`` line per item."""
    body = sorted(
        f"{indent}{INDENT}{maybe_wrap(key)} {maybe_wrap(value)}"
        for key, value in mapping.items()
    )
    return [f"{indent}{maybe_wrap(name)}:", *body]


def encode_entry(entry: Entry, indent: str = INDENT) -> list[str]:
    """Render the fields of one entry in yarn's field order."""
    lines: list[str] = []
    for name, value in entry.to_dict().items():
        if isinstance(value, dict):
            lines.extend(encode_map(value, name, indent))
        else:
            lines.append(f"{indent}{maybe_wrap(name)} {maybe_wrap(value)}")
    return lines


def group_entries(entries: dict[str, Entry]) -> list[tuple[list[str], Entry]]:
    """Collapse keys whose entries are equal; groups ordered by joined key."""
    groups: dict[tuple, tuple[list[str], Entry]] = {}
    for key, entry in entries.items():
        sig = entry.signature()
        if sig in groups:
            groups[sig][0].append(key)
        else:
            groups[sig] = ([key], entry)

    result = [(sorted(keys), entry) for keys, entry in groups.values()]
    result.sort(key=lambda group: ", ".join(group[0]))
    return result


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def encode_to_string(entries: dict[str, Entry]) -> str:
    blocks: list[str] = []
    for keys, entry in group_entries(entries):
        key_line = ", ".join(maybe_wrap(key) for key in keys) + ":"
        blocks.append("\n".join([key_line, *encode_entry(entry)]) + "\n")
    logger.debug("encoded %d entries as %d blocks", len(entries), len(blocks))
    return "\n".join(HEADER) + "\n\n\n" + "\n".join(blocks)


def encode(entries: dict[str, Entry], writer: IO[str]) -> None:
    """Write the encoded lockfile to *writer*; write failures become EncodeError."""
    text = encode_to_string(entries)
    try:
        writer.write(text)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"write failed: {exc}") from exc
