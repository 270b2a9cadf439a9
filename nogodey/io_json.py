"""Read message collections and locale JSON files."""

import json
from pathlib import Path
from typing import Dict, Any, List

from nogodey.errors import LocaleReadError, SourceReadError
from nogodey.messages import Message


def read_json_file(file_path: Path) -> Any:
    """
    Read and decode a JSON file.

    Args:
        file_path: Path to the JSON file

    Returns:
        Decoded JSON value

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    if not file_path.exists():
        raise FileNotFoundError(f"file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_messages_file(file_path: Path) -> List[Message]:
    """
    Read the canonical message collection (js/dist/messages.json).

    Validation is strict: an empty key or a key repeated in the array makes
    the whole file unreadable, instead of being passed through to the diff
    where the last duplicate would silently shadow the others.

    Args:
        file_path: Path to the messages JSON array

    Returns:
        Messages in file order

    Raises:
        SourceReadError: If the file is missing, not valid JSON, not an array,
            or contains empty or duplicate keys
    """
    try:
        data = read_json_file(file_path)
    except (OSError, json.JSONDecodeError) as e:
        raise SourceReadError(f"reading {file_path}: {e}", cause=e) from e

    if not isinstance(data, list):
        raise SourceReadError(f"{file_path}: expected a JSON array of messages")

    messages: List[Message] = []
    seen = set()

    for i, entry in enumerate(data):
        try:
            message = Message.from_dict(entry)
        except (ValueError, TypeError) as e:
            raise SourceReadError(f"{file_path}: entry {i}: {e}", cause=e) from e

        if not message.key:
            raise SourceReadError(f"{file_path}: entry {i} has an empty key")
        if message.key in seen:
            raise SourceReadError(f"{file_path}: duplicate key '{message.key}'")

        seen.add(message.key)
        messages.append(message)

    return messages


def read_locale_file(file_path: Path) -> Dict[str, str]:
    """
    Read a single locale mapping file.

    Args:
        file_path: Path to the locale JSON file (e.g. js/locales/fr.json)

    Returns:
        Dictionary mapping translation keys to translated text

    Raises:
        LocaleReadError: If the file is missing, not valid JSON, or not an
            object of string values
    """
    try:
        data = read_json_file(file_path)
    except (OSError, json.JSONDecodeError) as e:
        raise LocaleReadError(f"reading {file_path}: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise LocaleReadError(f"{file_path}: expected a JSON object")

    for key, value in data.items():
        if not isinstance(value, str):
            raise LocaleReadError(
                f"{file_path}: value for '{key}' must be a string, got {type(value).__name__}"
            )

    return data


def list_locales(locales_dir: Path) -> List[str]:
    """
    List locale codes that have a *.json file in a locales directory.

    Args:
        locales_dir: Directory containing locale JSON files

    Returns:
        Sorted locale codes, e.g. ["en", "fr", "pidgin"]
    """
    if not locales_dir.exists():
        return []

    return sorted(json_file.stem for json_file in locales_dir.glob("*.json"))
