"""Tests for parsing LLM translation replies."""

import pytest

from nogodey.errors import ParseError
from nogodey.validate.response import parse_translation_response, strip_quotes


def test_parse_simple_reply():
    """Test the basic KEY: "value" format."""
    assert parse_translation_response('a: "A"\nb: "B"') == {"a": "A", "b": "B"}


def test_parse_ignores_blank_lines_and_whitespace():
    """Test that blank lines and surrounding whitespace are ignored."""
    reply = '\n   greeting :   "How far"   \n\n\tfarewell: "Waka well"\n'

    assert parse_translation_response(reply) == {
        "greeting": "How far",
        "farewell": "Waka well",
    }


def test_parse_splits_on_first_colon():
    """Test that colons inside the value are kept."""
    assert parse_translation_response('time: "Time: 10:30"') == {"time": "Time: 10:30"}


def test_parse_unquoted_value():
    """Test that values without quotes are kept as-is."""
    assert parse_translation_response("a: Plain text") == {"a": "Plain text"}


def test_parse_strips_one_pair_of_quotes_only():
    """Test that only the outer pair of quotes is removed."""
    assert parse_translation_response('a: ""quoted""') == {"a": '"quoted"'}


def test_parse_drops_empty_values():
    """Test that an empty value after stripping quotes is dropped."""
    assert parse_translation_response('a: ""\nb: "B"\nc:') == {"b": "B"}


def test_parse_drops_empty_keys():
    """Test that a line starting with a colon is dropped."""
    assert parse_translation_response(': "orphan"\nb: "B"') == {"b": "B"}


def test_parse_last_duplicate_wins():
    """Test that a later line for the same key overwrites the earlier one."""
    assert parse_translation_response('a: "first"\na: "second"') == {"a": "second"}


def test_parse_keeps_keys_not_requested():
    """Test that reply keys are not filtered against any batch."""
    assert parse_translation_response('Here you go: "ok"') == {"Here you go": "ok"}


def test_parse_no_colon_lines_fails():
    """Test that a reply without colon-bearing lines raises ParseError."""
    reply = "Sorry, I cannot help with that."

    with pytest.raises(ParseError) as exc_info:
        parse_translation_response(reply)

    assert exc_info.value.raw_text == reply
    assert reply in str(exc_info.value)


def test_parse_empty_reply_fails():
    """Test that an empty reply raises ParseError."""
    with pytest.raises(ParseError):
        parse_translation_response("   \n  ")


def test_strip_quotes():
    """Test quote stripping edge cases."""
    assert strip_quotes('"x"') == "x"
    assert strip_quotes('""') == ""
    assert strip_quotes('"') == '"'
    assert strip_quotes('"x') == '"x'


@pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x85", "\x0b", "\x0c", "\x1e"])
def test_parse_splits_on_newline_only(separator):
    """Test that Unicode line separators inside a value do not split the line."""
    reply = f'a: "Line one{separator}line two"\r\nb: "B"'

    assert parse_translation_response(reply) == {
        "a": f"Line one{separator}line two",
        "b": "B",
    }
