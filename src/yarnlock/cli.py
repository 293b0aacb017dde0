"""Command-line interface: ``yarnlock`` / ``python -m yarnlock``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO

from .document import LockFile, dump, load
from .errors import LockfileError


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def _cmd_roots(lockfile: LockFile, args: argparse.Namespace, dest: IO[str]) -> None:
    for key in lockfile.root_entries():
        print(key, file=dest)


def _cmd_format(lockfile: LockFile, args: argparse.Namespace, dest: IO[str]) -> None:
    if args.output:
        dump(lockfile, args.output)
    else:
        lockfile.encode(dest)


def _cmd_json(lockfile: LockFile, args: argparse.Namespace, dest: IO[str]) -> None:
    print(json.dumps(lockfile.to_dict(), indent=2, sort_keys=True, ensure_ascii=False), file=dest)


def _cmd_check(lockfile: LockFile, args: argparse.Namespace, dest: IO[str]) -> None:
    print(f"{args.file}: {len(lockfile)} entries, {len(lockfile.root_entries())} roots", file=dest)


_COMMANDS = {
    "roots": _cmd_roots,
    "format": _cmd_format,
    "json": _cmd_json,
    "check": _cmd_check,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yarnlock",
        description="Parse, inspect and re-encode yarn v1 lockfiles.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    roots = sub.add_parser("roots", help="Print entries no other entry depends on.")
    roots.add_argument("file")

    fmt = sub.add_parser("format", help="Re-encode a lockfile.")
    fmt.add_argument("file")
    fmt.add_argument("-o", "--output", help="Write to this path instead of stdout.")

    as_json = sub.add_parser("json", help="Dump the parsed lockfile as JSON.")
    as_json.add_argument("file")

    check = sub.add_parser("check", help="Parse a lockfile and report its size.")
    check.add_argument("file")
    return parser


def main(argv: list[str] | None = None, dest: IO[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    dest = dest if dest is not None else sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        lockfile = load(args.file)
        _COMMANDS[args.command](lockfile, args, dest)
    except LockfileError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
