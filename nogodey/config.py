"""Sync configuration from CLI flags, environment variables and .env files."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from nogodey.errors import ConfigurationError
from nogodey.providers.base import TranslationClient, DEFAULT_TIMEOUT


DEFAULT_LOCALES = ["pidgin"]
DEFAULT_BATCH_SIZE = 200
DEFAULT_MAX_RETRIES = 3
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_MESSAGES_FILE = Path("js/dist/messages.json")
DEFAULT_LOCALES_DIR = Path("js/locales")


@dataclass
class SyncConfig:
    """Configuration for the sync command."""
    locales: List[str] = field(default_factory=lambda: list(DEFAULT_LOCALES))
    batch_size: int = DEFAULT_BATCH_SIZE
    max_retries: int = DEFAULT_MAX_RETRIES
    api_key: str = ""
    model: str = DEFAULT_MODEL
    # Lets tests inject a stub backend
    client: Optional[TranslationClient] = None
    base_url: Optional[str] = None
    messages_file: Path = DEFAULT_MESSAGES_FILE
    locales_dir: Path = DEFAULT_LOCALES_DIR
    request_timeout: float = DEFAULT_TIMEOUT

    def locale_file(self, locale: str) -> Path:
        """Path of the mapping file for a locale."""
        return self.locales_dir / f"{locale}.json"

    def validate(self) -> None:
        """
        Check the values the sync engine relies on.

        Raises:
            ConfigurationError: If the credential is missing, no locale is
                given, or batch_size / max_retries are below 1
        """
        if not self.api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY not found in environment variables or .env file"
            )
        if not self.locales:
            raise ConfigurationError("at least one locale is required")
        if self.batch_size < 1:
            raise ConfigurationError(f"batch size must be >= 1, got {self.batch_size}")
        if self.max_retries < 1:
            raise ConfigurationError(f"max retries must be >= 1, got {self.max_retries}")


def load_env_config() -> None:
    """Load variables from a .env file if present; the real environment wins."""
    load_dotenv(find_dotenv(usecwd=True))


def get_env_with_default(key: str, default: str) -> str:
    value = os.getenv(key)
    return value if value else default


def _env_int(key: str) -> Optional[int]:
    value = os.getenv(key)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_locales(value: str) -> List[str]:
    """Split a comma-separated locale list, trimming whitespace."""
    return [part.strip() for part in value.split(",") if part.strip()]


def resolve_paths(
    messages_file: Optional[Path] = None,
    locales_dir: Optional[Path] = None
) -> Tuple[Path, Path]:
    """
    Resolve the messages file and locales directory: flag, then
    SYNC_MESSAGES_FILE / SYNC_LOCALES_DIR, then the defaults.

    Call load_env_config first so .env values are visible.
    """
    if messages_file is None:
        messages_file = Path(get_env_with_default("SYNC_MESSAGES_FILE", str(DEFAULT_MESSAGES_FILE)))
    if locales_dir is None:
        locales_dir = Path(get_env_with_default("SYNC_LOCALES_DIR", str(DEFAULT_LOCALES_DIR)))
    return messages_file, locales_dir


def get_env_config(
    flag_locales: List[str],
    flag_batch_size: int = DEFAULT_BATCH_SIZE,
    flag_max_retries: int = DEFAULT_MAX_RETRIES,
    messages_file: Optional[Path] = None,
    locales_dir: Optional[Path] = None
) -> SyncConfig:
    """
    Build a SyncConfig from CLI flags and environment variables.

    Environment:
        OPENAI_API_KEY: Backend credential
        OPENAI_MODEL: Model name (default: gpt-3.5-turbo)
        OPENAI_BASE_URL: Optional OpenAI-compatible endpoint
        SYNC_BATCH_SIZE: Overrides the batch size flag when it is an integer
        SYNC_MAX_RETRIES: Overrides the max retries flag when it is an integer
        SYNC_DEFAULT_LOCALES: Used only when the locales flag was left at its default
        SYNC_MESSAGES_FILE / SYNC_LOCALES_DIR: Used when no path flag is given

    Args:
        flag_locales: Locales from the --locales flag
        flag_batch_size: Value of the --batch-size flag
        flag_max_retries: Value of the --max-retries flag
        messages_file: Value of the --messages-file flag, if given
        locales_dir: Value of the --locales-dir flag, if given

    Returns:
        SyncConfig (not yet validated)
    """
    load_env_config()

    config = SyncConfig(
        locales=list(flag_locales),
        batch_size=flag_batch_size,
        max_retries=flag_max_retries,
        api_key=os.getenv("OPENAI_API_KEY", ""),
        model=get_env_with_default("OPENAI_MODEL", DEFAULT_MODEL),
        base_url=os.getenv("OPENAI_BASE_URL") or None,
    )

    env_batch_size = _env_int("SYNC_BATCH_SIZE")
    if env_batch_size is not None:
        config.batch_size = env_batch_size

    env_max_retries = _env_int("SYNC_MAX_RETRIES")
    if env_max_retries is not None:
        config.max_retries = env_max_retries

    env_locales = os.getenv("SYNC_DEFAULT_LOCALES")
    if env_locales and list(flag_locales) == DEFAULT_LOCALES:
        config.locales = parse_locales(env_locales)

    config.messages_file, config.locales_dir = resolve_paths(messages_file, locales_dir)

    return config
