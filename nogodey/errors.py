"""Error taxonomy for the sync engine."""

from typing import Optional


class SyncError(Exception):
    """Base exception for sync errors."""

    def __init__(
        self,
        message: str,
        stage: str,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.stage = stage
        self.cause = cause


class ConfigurationError(SyncError):
    """Invalid or incomplete sync configuration."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, stage="configuration", cause=cause)


class SourceReadError(SyncError):
    """The canonical message collection could not be read."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, stage="read_messages", cause=cause)


class LocaleReadError(SyncError):
    """A locale mapping file is missing or corrupt."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, stage="read_locale", cause=cause)


class LocaleWriteError(SyncError):
    """A locale mapping file could not be written."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, stage="write_locale", cause=cause)


class BackendError(SyncError):
    """The text-generation backend call failed."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, stage="backend", cause=cause)


class ParseError(SyncError):
    """No translations could be parsed from a backend reply."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message, stage="parse")
        self.raw_text = raw_text


class RetryExhaustedError(SyncError):
    """Every attempt for a batch failed."""

    def __init__(self, attempts: int, last_error: Optional[Exception]):
        super().__init__(
            f"translation failed after {attempts} attempts: {last_error}",
            stage="translate",
            cause=last_error
        )
        self.attempts = attempts
        self.last_error = last_error


class LocaleSyncError(SyncError):
    """Syncing a single locale failed; nothing was written for it."""

    def __init__(
        self,
        locale: str,
        message: str,
        batch: Optional[int] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, stage="sync_locale", cause=cause)
        self.locale = locale
        self.batch = batch
