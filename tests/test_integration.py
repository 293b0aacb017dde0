"""End-to-end round-trip tests against a real-shaped yarn.lock."""

import io
from pathlib import Path

import pytest

from yarnlock import Entry, LockFile, load, parse_lockfile

FIXTURE = Path(__file__).parent / "fixtures" / "yarn.lock"


@pytest.fixture
def text():
    return FIXTURE.read_text(encoding="utf-8")


def test_roundtrip_is_byte_identical(text):
    lf = parse_lockfile(text)
    buf = io.StringIO()
    lf.encode(buf)
    assert buf.getvalue() == text

def test_reparse_of_encoding_is_equal(text):
    lf = parse_lockfile(text)
    assert parse_lockfile(lf.to_string()) == lf

def test_fixture_contents(text):
    lf = parse_lockfile(text, file_loc=str(FIXTURE))
    assert len(lf) == 15
    assert lf.comments == [
        "THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.",
        "yarn lockfile v1",
    ]
    assert lf["js-tokens@^3.0.0 || ^4.0.0"] == lf["js-tokens@^4.0.0"]
    assert lf["chokidar@^3.5.1"].optional_dependencies == {"fsevents": "~2.3.1"}
    assert lf["color-name@1.1.3"].integrity == "sha1-p9BVi9icQveV3UIyj3QIMcpTvCU="

def test_fixture_roots():
    assert load(FIXTURE).root_entries() == [
        "@babel/code-frame@^7.0.0",
        "@babel/code-frame@^7.10.4",
        "chokidar@^3.5.1",
        "fsevents@~2.3.1",
        "js-tokens@^3.0.0 || ^4.0.0",
    ]

def test_edit_then_encode(text):
    lf = parse_lockfile(text)
    lf["left-pad@^1.3.0"] = Entry(
        version="1.3.0",
        resolved="https://registry.yarnpkg.com/left-pad/-/left-pad-1.3.0.tgz",
        integrity="sha512-abc==",
    )
    out = lf.to_string()
    assert 'left-pad@^1.3.0:\n  version "1.3.0"\n' in out
    assert out.index("js-tokens@^4.0.0:") < out.index("left-pad@^1.3.0:")
    assert parse_lockfile(out) == lf

def test_grouping_after_edit():
    lf = LockFile({"a@1.0.0": Entry(version="1.0.0")})
    lf["b@1.0.0"] = Entry(version="1.0.0")
    assert 'a@1.0.0, b@1.0.0:\n  version "1.0.0"\n' in lf.to_string()
