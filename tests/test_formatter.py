"""Tests for scalar quoting."""

import pytest

from yarnlock.formatter import maybe_wrap, needs_quotes
from yarnlock.tokenizer import TokenKind, tokenize
from yarnlock.values import VString


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1.2.3", '"1.2.3"'),
        ("^1.2.3", '"^1.2.3"'),
        ("@foo/bar", '"@foo/bar"'),
        ("true", '"true"'),
        ("false", '"false"'),
        ("https://foo.org", '"https://foo.org"'),
        ("foo", "foo"),
        (
            "sha512-JIB2+XJrb7v3zceV2XzDhGIB902CmKGSpSl4q2C6agU9SNLG/2V1RtFRGPG1Ajh9STj3+q6zJMOC+N/pp2P9DA==",
            "sha512-JIB2+XJrb7v3zceV2XzDhGIB902CmKGSpSl4q2C6agU9SNLG/2V1RtFRGPG1Ajh9STj3+q6zJMOC+N/pp2P9DA==",
        ),
        (">=2.2.7 <3", '">=2.2.7 <3"'),
    ],
)
def test_maybe_wrap(value, expected):
    assert maybe_wrap(value) == expected


# ---------------------------------------------------------------------------
# Bare admission rules
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value", ["foo", "/abs/path", ".hidden", "-dash", "a@1.0.0", 'a"b'])
def test_bare_values(value):
    assert not needs_quotes(value)

@pytest.mark.parametrize("value", ["", "123", "a:b", "a b", "a,b", "a\nb", "a\rb", "trueish", "falsey", "ñ"])
def test_quoted_values(value):
    assert needs_quotes(value)

def test_escapes_control_characters():
    assert maybe_wrap("a\nb") == '"a\\nb"'

def test_non_ascii_kept_literal():
    assert maybe_wrap("ñ") == '"ñ"'

def test_non_string_scalars_quoted():
    assert maybe_wrap(True) == '"true"'
    assert maybe_wrap(False) == '"false"'
    assert maybe_wrap(12) == '"12"'


# ---------------------------------------------------------------------------
# Agreement with the tokenizer
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "value",
    ["foo", "1.2.3", "true", "trueish", "a b", 'say "hi"', "back\\slash", "@scope/pkg@^1", "x,y", ""],
)
def test_formatted_value_tokenizes_back(value):
    tokens = tokenize(maybe_wrap(value) + "\n")
    assert tokens[0].kind is TokenKind.String
    assert tokens[0].value == VString(value)
    assert tokens[1].kind is TokenKind.NewLine
