"""Merge translation results into a locale mapping and persist it."""

import json
from pathlib import Path
from typing import Dict, Mapping

from nogodey.errors import LocaleWriteError


def write_locale_file(file_path: Path, data: Mapping[str, str]) -> None:
    """
    Write a locale mapping to a JSON file, replacing any previous content.

    Args:
        file_path: Path to output JSON file
        data: Dictionary of translation keys and values

    Raises:
        LocaleWriteError: If the directory or file cannot be written
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(dict(data), f, ensure_ascii=False, indent=2)
            f.write("\n")
    except OSError as e:
        raise LocaleWriteError(f"writing locale file {file_path}: {e}", cause=e) from e


def merge_translations(
    existing: Dict[str, str],
    translations: Mapping[str, str]
) -> Dict[str, int]:
    """
    Merge a batch's translations into a locale mapping in place.

    New keys are inserted and keys already present are overwritten.

    Args:
        existing: Locale mapping being built for this run
        translations: Parsed translations from one batch

    Returns:
        Dictionary with merge statistics:
        {
            "added": int,    # Keys that were not present before
            "updated": int   # Keys whose value was replaced
        }
    """
    added = 0
    updated = 0

    for key, text in translations.items():
        if key in existing:
            updated += 1
        else:
            added += 1
        existing[key] = text

    return {"added": added, "updated": updated}
