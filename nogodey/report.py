"""Generate summary reports for sync runs."""

from pathlib import Path
from typing import Dict, Any, List

from nogodey.errors import LocaleReadError
from nogodey.io_json import read_locale_file
from nogodey.messages import Message
from nogodey.select import diff_keys


def generate_summary_report(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Aggregate per-locale sync results.

    Args:
        results: Result dictionaries returned by sync_command

    Returns:
        Dictionary with report data:
        {
            "locales": [per-locale result, ...],
            "missing_before": int,
            "translated": int,
            "missing_after": int,
            "batches_processed": int,
            "locales_written": int
        }
    """
    missing_before = sum(r.get("missing", 0) for r in results)
    translated = sum(r.get("translations_added", 0) for r in results)
    missing_after = sum(r.get("remaining", r.get("missing", 0)) for r in results)

    return {
        "locales": results,
        "missing_before": missing_before,
        "translated": translated,
        "missing_after": missing_after,
        "batches_processed": sum(r.get("batches", 0) for r in results),
        "locales_written": sum(1 for r in results if r.get("written")),
    }


def missing_key_status(
    messages: List[Message],
    locales: List[str],
    locales_dir: Path
) -> List[Dict[str, Any]]:
    """
    Count missing keys per locale without contacting the backend.

    Args:
        messages: Canonical messages
        locales: Locales to inspect
        locales_dir: Directory containing {locale}.json files

    Returns:
        One {"locale", "existing", "missing", "readable"} dictionary per locale
    """
    status = []

    for locale in locales:
        readable = True
        try:
            existing = read_locale_file(locales_dir / f"{locale}.json")
        except LocaleReadError:
            existing = {}
            readable = False

        status.append({
            "locale": locale,
            "existing": len(existing),
            "missing": len(diff_keys(messages, existing)),
            "readable": readable,
        })

    return status


def print_summary_report(report: Dict[str, Any]) -> None:
    """
    Print a formatted summary report.

    Args:
        report: Report dictionary from generate_summary_report
    """
    print("\n" + "=" * 60)
    print("Translation Sync Summary")
    print("=" * 60)
    for result in report["locales"]:
        state = "written" if result.get("written") else "unchanged"
        print(
            f"{result['locale']:<12} missing {result.get('missing', 0):>5}  "
            f"translated {result.get('translations_added', 0):>5}  ({state})"
        )
    print("-" * 60)
    print(f"Missing before:  {report['missing_before']}")
    print(f"Translated:      {report['translated']}")
    print(f"Missing after:   {report['missing_after']}")
    print(f"Batches:         {report['batches_processed']}")
    print(f"Locales written: {report['locales_written']}")
    print("=" * 60 + "\n")


def print_status_report(status: List[Dict[str, Any]], total_messages: int) -> None:
    """
    Print missing-key counts per locale.

    Args:
        status: Output of missing_key_status
        total_messages: Number of canonical messages
    """
    print("\n" + "=" * 60)
    print(f"Missing keys ({total_messages} messages)")
    print("=" * 60)
    for entry in status:
        note = "" if entry["readable"] else "  (no readable locale file)"
        print(f"{entry['locale']:<12} missing {entry['missing']:>5} of {total_messages}{note}")
    print("=" * 60 + "\n")
