"""Prompt builder for translation requests."""

from typing import List

from nogodey.messages import Message


SYSTEM_PROMPT = (
    "You are a professional translator. Translate UI strings accurately while "
    "preserving placeholders, formatting, and context. Return only the requested format."
)


def build_translation_prompt(batch: List[Message], locale: str) -> str:
    """
    Build a translation prompt for the LLM.

    Values are substituted literally; quotes inside default text are not escaped.

    Args:
        batch: Messages to translate, in batch order
        locale: Target locale identifier (e.g., "pidgin", "fr")

    Returns:
        Prompt string for the LLM
    """
    lines = [
        f"Translate these UI strings into {locale} preserving placeholders and "
        f"maintaining the same tone and context. Return only the translations in "
        f"the format KEY: \"Translation\":\n\n"
    ]

    for message in batch:
        lines.append(f'{message.key}: "{message.default}"\n')

    return "".join(lines)
