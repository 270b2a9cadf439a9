"""Tests for translation prompt building."""

from nogodey.messages import Message
from nogodey.prompts.translate import build_translation_prompt


def test_build_translation_prompt_exact_text():
    """Test the full prompt for a small batch."""
    batch = [
        Message(key="greeting", default="Hello {name}"),
        Message(key="farewell", default="Goodbye"),
    ]

    prompt = build_translation_prompt(batch, "pidgin")

    assert prompt == (
        "Translate these UI strings into pidgin preserving placeholders and maintaining "
        "the same tone and context. Return only the translations in the format "
        "KEY: \"Translation\":\n\n"
        "greeting: \"Hello {name}\"\n"
        "farewell: \"Goodbye\"\n"
    )


def test_build_translation_prompt_contains_locale_and_every_message():
    """Test that every message line appears verbatim, in batch order."""
    batch = [Message(key=f"k{i}", default=f"Text {i}") for i in range(5)]

    prompt = build_translation_prompt(batch, "fr")

    assert "into fr " in prompt
    positions = [prompt.index(f'k{i}: "Text {i}"') for i in range(5)]
    assert positions == sorted(positions)


def test_build_translation_prompt_does_not_escape_quotes():
    """Test that quotes in default text are substituted literally."""
    batch = [Message(key="quote", default='Say "hi"')]

    prompt = build_translation_prompt(batch, "en")

    assert 'quote: "Say "hi""\n' in prompt


def test_build_translation_prompt_is_deterministic():
    """Test that the same batch always renders the same prompt."""
    batch = [Message(key="a", default="A")]

    assert build_translation_prompt(batch, "de") == build_translation_prompt(batch, "de")
