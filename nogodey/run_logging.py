"""Structured per-run logging for sync operations."""

import json
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any, List, Optional, TextIO


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with a trailing Z."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class RunLogger:
    """
    Logger for sync runs.

    Every event is written as one JSON object per line to `stream`:
    {"level": "info", "msg": "...", "timestamp": "...", <fields>}

    When `runs_dir` is given, the run also gets its own directory with
    events.jsonl, requests.jsonl, responses.jsonl, failures.jsonl and a
    summary.json written by finalize().
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        runs_dir: Optional[Path] = None,
        run_id: Optional[str] = None
    ):
        """
        Initialize run logger.

        Args:
            stream: Where events are written (default: sys.stdout at call time)
            runs_dir: Optional base directory for run artifacts (e.g., work/runs)
            run_id: Optional run ID. If None, generates a new UUID.
        """
        self.stream = stream
        self.run_id = run_id or str(uuid.uuid4())
        self.run_dir: Optional[Path] = None

        if runs_dir is not None:
            self.run_dir = runs_dir / self.run_id
            self.run_dir.mkdir(parents=True, exist_ok=True)

        self.summary: Dict[str, Any] = {
            "run_id": self.run_id,
            "started_at": utc_timestamp(),
            "completed_at": None,
            "status": None,
            "locales": [],
            "batches_processed": 0,
            "translations_added": 0,
            "failed_attempts": 0,
        }

    def _append(self, filename: str, record: Dict[str, Any]) -> None:
        if self.run_dir is None:
            return
        with open(self.run_dir / filename, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")

    def log(self, level: str, msg: str, **fields: Any) -> None:
        """
        Emit one structured event.

        Args:
            level: "info", "warn" or "error"
            msg: Event message
            **fields: Key/value metadata merged into the event
        """
        entry: Dict[str, Any] = {
            "level": level,
            "msg": msg,
            "timestamp": utc_timestamp(),
        }
        entry.update(fields)

        line = json.dumps(entry, ensure_ascii=False, default=str)
        stream = self.stream if self.stream is not None else sys.stdout
        print(line, file=stream)

        self._append("events.jsonl", entry)

    def info(self, msg: str, **fields: Any) -> None:
        self.log("info", msg, **fields)

    def warn(self, msg: str, **fields: Any) -> None:
        self.log("warn", msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        self.log("error", msg, **fields)

    def timer(self, name: str) -> "Timer":
        """Start a Timer that reports to this logger."""
        return Timer(name, logger=self)

    def log_request(
        self,
        locale: str,
        batch_id: int,
        items: List[Dict[str, Any]]
    ) -> None:
        """
        Log a translation request.

        Args:
            locale: Target locale
            batch_id: 1-based batch number
            items: Messages in the batch
        """
        self._append("requests.jsonl", {
            "batch_id": batch_id,
            "timestamp": utc_timestamp(),
            "locale": locale,
            "items": items,
            "item_count": len(items)
        })

    def log_response(
        self,
        locale: str,
        batch_id: int,
        attempt: int,
        response_text: str,
        translations: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Log a raw backend reply and what was parsed from it.

        Args:
            locale: Target locale
            batch_id: 1-based batch number
            attempt: 1-based attempt number
            response_text: Raw reply from the backend
            translations: Parsed translations, or None if parsing failed
        """
        self._append("responses.jsonl", {
            "batch_id": batch_id,
            "timestamp": utc_timestamp(),
            "locale": locale,
            "attempt": attempt,
            "success": translations is not None,
            "response": response_text,
            "translations": translations or {}
        })

    def log_failure(
        self,
        locale: str,
        batch_id: int,
        error_type: str,
        error_message: str,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log a failed translation attempt.

        Args:
            locale: Target locale
            batch_id: 1-based batch number
            error_type: Error stage (e.g., "backend", "parse")
            error_message: Error message
            context: Optional context dictionary
        """
        self._append("failures.jsonl", {
            "batch_id": batch_id,
            "timestamp": utc_timestamp(),
            "locale": locale,
            "error_type": error_type,
            "error_message": error_message,
            "context": context or {}
        })

        self.summary["failed_attempts"] += 1

    def update_summary(
        self,
        locale: Optional[str] = None,
        batches_processed: Optional[int] = None,
        translations_added: Optional[int] = None,
        status: Optional[str] = None
    ) -> None:
        """
        Update summary statistics. Counts are added to the running totals.

        Args:
            locale: Locale that finished processing
            batches_processed: Batches processed for that locale
            translations_added: Translations merged for that locale
            status: Final run status ("success" or "failed")
        """
        if locale is not None:
            self.summary["locales"].append(locale)
        if batches_processed is not None:
            self.summary["batches_processed"] += batches_processed
        if translations_added is not None:
            self.summary["translations_added"] += translations_added
        if status is not None:
            self.summary["status"] = status

    def finalize(self) -> None:
        """Finalize the run and write summary."""
        self.summary["completed_at"] = utc_timestamp()

        if self.run_dir is None:
            return

        with open(self.run_dir / "summary.json", "w", encoding="utf-8") as f:
            json.dump(self.summary, f, ensure_ascii=False, indent=2)

    def get_summary(self) -> Dict[str, Any]:
        """Get current summary."""
        return dict(self.summary)


class Timer:
    """Measures a named operation and logs its duration on exit."""

    def __init__(self, name: str, logger: Optional[RunLogger] = None):
        self.name = name
        self.logger = logger
        self.start = time.perf_counter()
        self.duration_ms: Optional[float] = None

    def observe(self, logger: Optional[RunLogger] = None) -> float:
        """
        Log the duration since the timer was started.

        Returns:
            Elapsed milliseconds
        """
        self.duration_ms = (time.perf_counter() - self.start) * 1000.0
        target = logger or self.logger
        if target is not None:
            target.info(
                "timer completed",
                operation=self.name,
                **{f"{self.name}_duration_ms": self.duration_ms}
            )
        return self.duration_ms

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.observe()
