"""Tests for the Writer layer."""

import pytest

from confstore.errors import ConfValueError
from confstore.model import Dialect, Option
from confstore.reader import parse_line
from confstore.writer import (
    check_name,
    check_token,
    check_value,
    format_option,
    needs_quoting,
)


# ---------------------------------------------------------------------------
# needs_quoting
# ---------------------------------------------------------------------------

def test_plain_value_unquoted():
    assert not needs_quoting("jacky")

def test_space_needs_quotes():
    assert needs_quoting("jacky liu")

def test_tab_needs_quotes():
    assert needs_quoting("a\tb")

def test_empty_needs_quotes():
    assert needs_quoting("")

def test_delim_needs_quotes():
    assert needs_quoting("a=b")
    assert not needs_quoting("a=b", Dialect(delim=":"))

def test_leading_paren_needs_quotes():
    assert needs_quoting("(x)")
    assert not needs_quoting("x(y)")


# ---------------------------------------------------------------------------
# format_option
# ---------------------------------------------------------------------------

def test_format_scalar():
    assert format_option(Option.scalar("age", "25")) == "age = 25\n"

def test_format_quoted():
    assert format_option(Option.scalar("name", "jacky liu")) == 'name = "jacky liu"\n'

def test_format_array():
    opt = Option.array("family", ["ben", "lan", "man"])
    assert format_option(opt) == "family = (ben,lan,man)\n"

def test_format_custom_delim():
    assert format_option(Option.scalar("a", "b"), Dialect(delim=":")) == "a : b\n"

@pytest.mark.parametrize(
    "opt",
    [
        Option.scalar("name", "jacky liu"),
        Option.scalar("empty", ""),
        Option.scalar("url", "http://x/?a=b"),
        Option.scalar("paren", "(not an array)"),
        Option.scalar("tabbed", "a\tb"),
        Option.array("family", ["ben", "lan", "man"]),
    ],
)
def test_format_parses_back(opt):
    assert parse_line(format_option(opt)) == opt


# ---------------------------------------------------------------------------
# Representability checks
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("name", ["", "a b", 'a"b', "a=b", "#x", "a\tb"])
def test_bad_names(name):
    with pytest.raises(ConfValueError):
        check_name(name)

def test_good_name():
    assert check_name("smtp.host") == "smtp.host"

def test_comment_char_allowed_inside_name():
    assert check_name("a#b") == "a#b"

@pytest.mark.parametrize("value", ['say "hi"', "two\nlines", "cr\r"])
def test_bad_values(value):
    with pytest.raises(ConfValueError):
        check_value(value)

@pytest.mark.parametrize("token", ["", "a b", "a,b", "(a", "a)", 'a"', "a=b"])
def test_bad_tokens(token):
    with pytest.raises(ConfValueError):
        check_token(token)

def test_conf_value_error_is_value_error():
    with pytest.raises(ValueError):
        check_name("")
