"""Tests for the yarnlock command line."""

import io
import json
from pathlib import Path

import pytest

from yarnlock.cli import build_parser, main

FIXTURE = Path(__file__).parent / "fixtures" / "yarn.lock"


def run(*argv):
    buf = io.StringIO()
    code = main(list(argv), dest=buf)
    return code, buf.getvalue()


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def test_roots():
    code, out = run("roots", str(FIXTURE))
    assert code == 0
    assert out.splitlines()[0] == "@babel/code-frame@^7.0.0"
    assert len(out.splitlines()) == 5

def test_format_to_stdout():
    code, out = run("format", str(FIXTURE))
    assert code == 0
    assert out == FIXTURE.read_text(encoding="utf-8")

def test_format_to_file(tmp_path):
    target = tmp_path / "out.lock"
    code, out = run("format", str(FIXTURE), "-o", str(target))
    assert code == 0
    assert out == ""
    assert target.read_text(encoding="utf-8") == FIXTURE.read_text(encoding="utf-8")

def test_json():
    code, out = run("json", str(FIXTURE))
    assert code == 0
    data = json.loads(out)
    assert data["chalk@^2.0.0"]["version"] == "2.4.2"
    assert "optionalDependencies" in data["chokidar@^3.5.1"]

def test_check():
    code, out = run("check", str(FIXTURE))
    assert code == 0
    assert "15 entries" in out


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

def test_parse_error_exit_status(tmp_path, capsys):
    bad = tmp_path / "yarn.lock"
    bad.write_text("foo\n bar: 1\n", encoding="utf-8")
    code, _ = run("check", str(bad))
    assert code == 1
    assert "error: TokenizeError" in capsys.readouterr().err

def test_missing_file(tmp_path, capsys):
    code, _ = run("roots", str(tmp_path / "nope.lock"))
    assert code == 1
    assert "error:" in capsys.readouterr().err

def test_command_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
