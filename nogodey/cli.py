"""CLI entrypoint."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from nogodey.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_LOCALES,
    DEFAULT_MAX_RETRIES,
    get_env_config,
    load_env_config,
    parse_locales,
    resolve_paths,
)
from nogodey.errors import LocaleSyncError, SyncError
from nogodey.io_json import read_messages_file, list_locales
from nogodey.report import (
    generate_summary_report,
    missing_key_status,
    print_status_report,
    print_summary_report,
)
from nogodey.run_logging import RunLogger
from nogodey.sync import sync_command


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nogodey",
        description="nogodey - Sync missing UI translations using an LLM"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # sync command
    sync_parser = subparsers.add_parser(
        "sync",
        help="Translate missing keys into js/locales/{locale}.json"
    )
    sync_parser.add_argument(
        "--locales",
        default=",".join(DEFAULT_LOCALES),
        help="Comma-separated list of locales to sync (default: pidgin)"
    )
    sync_parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Number of keys to process in each batch (default: {DEFAULT_BATCH_SIZE})"
    )
    sync_parser.add_argument(
        "--max-retries",
        type=int,
        default=DEFAULT_MAX_RETRIES,
        help=f"Maximum attempts per batch (default: {DEFAULT_MAX_RETRIES})"
    )
    sync_parser.add_argument(
        "--messages-file",
        type=Path,
        help="Extracted messages file (default: js/dist/messages.json)"
    )
    sync_parser.add_argument(
        "--locales-dir",
        type=Path,
        help="Directory containing locale JSON files (default: js/locales)"
    )
    sync_parser.add_argument(
        "--runs-dir",
        type=Path,
        help="Directory for per-run logs (disabled unless given)"
    )

    # status command
    status_parser = subparsers.add_parser(
        "status",
        help="Show how many keys each locale is missing"
    )
    status_parser.add_argument(
        "--locales",
        help="Comma-separated list of locales (default: every file in the locales directory)"
    )
    status_parser.add_argument(
        "--messages-file",
        type=Path,
        help="Extracted messages file (default: js/dist/messages.json)"
    )
    status_parser.add_argument(
        "--locales-dir",
        type=Path,
        help="Directory containing locale JSON files (default: js/locales)"
    )

    return parser


def run_sync(args: argparse.Namespace) -> int:
    config = get_env_config(
        parse_locales(args.locales),
        args.batch_size,
        args.max_retries,
        messages_file=args.messages_file,
        locales_dir=args.locales_dir
    )
    logger = RunLogger(runs_dir=args.runs_dir)

    try:
        results = sync_command(config, logger=logger)
    except LocaleSyncError as e:
        batch = f", batch {e.batch}" if e.batch is not None else ""
        print(f"✗ Error [{e.stage}: {e.locale}{batch}]: {e}", file=sys.stderr)
        return 1
    except SyncError as e:
        print(f"✗ Error [{e.stage}]: {e}", file=sys.stderr)
        return 1
    finally:
        logger.finalize()

    print_summary_report(generate_summary_report(results))
    print(f"✓ Sync complete. Run ID: {logger.run_id}")
    if logger.run_dir is not None:
        print(f"  Logs: {logger.run_dir}")
    return 0


def run_status(args: argparse.Namespace) -> int:
    load_env_config()
    messages_file, locales_dir = resolve_paths(args.messages_file, args.locales_dir)

    try:
        messages = read_messages_file(messages_file)
    except SyncError as e:
        print(f"✗ Error [{e.stage}]: {e}", file=sys.stderr)
        return 1

    locales = parse_locales(args.locales) if args.locales else list_locales(locales_dir)
    if not locales:
        print(f"✗ No locales given and none found in {locales_dir}", file=sys.stderr)
        return 1

    print_status_report(missing_key_status(messages, locales, locales_dir), len(messages))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "sync":
        sys.exit(run_sync(args))
    elif args.command == "status":
        sys.exit(run_status(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
