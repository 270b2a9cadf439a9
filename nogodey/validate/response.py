"""Parse LLM translation replies."""

from typing import Dict

from nogodey.errors import ParseError


def strip_quotes(value: str) -> str:
    """Remove exactly one pair of surrounding double quotes, if present."""
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_translation_response(response_text: str) -> Dict[str, str]:
    """
    Extract translations from a reply of lines shaped like KEY: "Translation".

    The reply is split on newline characters only, so other Unicode line
    separators stay inside values. Each non-blank line is split at its first
    colon. Entries with an empty key or value are dropped, and a key
    repeated later in the reply overwrites the earlier value. Keys are not
    checked against the batch that was requested.

    Args:
        response_text: Raw text response from LLM

    Returns:
        Dictionary mapping keys to translated text

    Raises:
        ParseError: If no translation could be parsed
    """
    translations: Dict[str, str] = {}

    for line in response_text.split("\n"):
        line = line.strip()
        if not line:
            continue

        key, sep, value = line.partition(":")
        if not sep:
            continue

        key = key.strip()
        value = strip_quotes(value.strip())

        if key and value:
            translations[key] = value

    if not translations:
        raise ParseError(
            f"failed to parse any translations from response: {response_text}",
            raw_text=response_text
        )

    return translations
