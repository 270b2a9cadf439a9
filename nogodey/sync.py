"""Sync missing translations for every configured locale."""

from typing import List, Dict, Any, Optional

from nogodey.config import SyncConfig
from nogodey.errors import (
    LocaleReadError,
    LocaleSyncError,
    LocaleWriteError,
    RetryExhaustedError,
    SyncError,
)
from nogodey.io_json import read_messages_file, read_locale_file
from nogodey.merge import merge_translations, write_locale_file
from nogodey.messages import Message
from nogodey.providers.base import TranslationClient
from nogodey.providers.openai import OpenAIClient
from nogodey.run_logging import RunLogger
from nogodey.select import diff_keys, batch_messages, count_batches
from nogodey.translate import translate_batch


def create_client(config: SyncConfig, logger: Optional[RunLogger] = None) -> TranslationClient:
    """Return the injected client, or the OpenAI client for the configured key."""
    if config.client is not None:
        return config.client
    return OpenAIClient(api_key=config.api_key, base_url=config.base_url, logger=logger)


def sync_command(
    config: SyncConfig,
    logger: Optional[RunLogger] = None
) -> List[Dict[str, Any]]:
    """
    Translate missing keys for each configured locale, in order.

    Args:
        config: Sync configuration
        logger: Optional run logger (default: a RunLogger writing to stdout)

    Returns:
        One result dictionary per locale (see sync_locale)

    Raises:
        ConfigurationError: If the configuration is invalid
        SourceReadError: If the message collection cannot be read
        LocaleSyncError: If a locale fails; later locales are not attempted
    """
    logger = logger or RunLogger()

    with logger.timer("sync_process"):
        logger.info(
            "starting sync process",
            locales=config.locales,
            batch_size=config.batch_size,
            model=config.model,
            has_api_key=bool(config.api_key)
        )

        try:
            config.validate()
        except SyncError as e:
            fields = {"error": str(e)}
            if not config.api_key:
                fields["help"] = "Set OPENAI_API_KEY environment variable or create a .env file"
            logger.error("invalid configuration", **fields)
            raise

        try:
            messages = read_messages_file(config.messages_file)
        except SyncError as e:
            logger.error("failed to read messages", file=str(config.messages_file), error=str(e))
            raise
        logger.info("loaded messages", count=len(messages))

        results = []
        for locale in config.locales:
            try:
                result = sync_locale(messages, locale, config, logger)
            except LocaleSyncError as e:
                logger.error(
                    "failed to sync locale",
                    locale=locale,
                    batch=e.batch,
                    error=str(e)
                )
                logger.update_summary(status="failed")
                raise
            results.append(result)
            logger.update_summary(
                locale=locale,
                batches_processed=result["batches"],
                translations_added=result["translations_added"]
            )

        logger.update_summary(status="success")
        logger.info("sync process completed successfully")

    return results


def sync_locale(
    messages: List[Message],
    locale: str,
    config: SyncConfig,
    logger: RunLogger,
    client: Optional[TranslationClient] = None
) -> Dict[str, Any]:
    """
    Sync a single locale.

    The locale file is written once, after every batch succeeded. A batch
    that exhausts its retries aborts the locale and nothing is written, so
    translations from earlier batches of this run are discarded.

    Args:
        messages: Canonical messages
        locale: Target locale
        config: Sync configuration
        logger: Run logger
        client: Optional backend (default: create_client(config))

    Returns:
        {
            "locale": str,
            "file": str,
            "existing": int,            # Keys in the file before the run
            "missing": int,             # Keys that needed translation
            "batches": int,             # Batches processed
            "translations_added": int,  # Keys merged from replies
            "remaining": int,           # Requested keys the replies did not answer
            "total_keys": int,          # Keys in the mapping after the run
            "written": bool
        }

    Raises:
        LocaleSyncError: If a batch exhausts its retries or the file cannot be written
    """
    with logger.timer(f"sync_locale_{locale}"):
        logger.info("syncing locale", locale=locale)

        locale_file = config.locale_file(locale)
        try:
            existing = read_locale_file(locale_file)
        except LocaleReadError as e:
            logger.warn(
                "failed to read existing locale file, starting fresh",
                locale=locale,
                error=str(e)
            )
            existing = {}
        logger.info("loaded existing translations", locale=locale, count=len(existing))

        result: Dict[str, Any] = {
            "locale": locale,
            "file": str(locale_file),
            "existing": len(existing),
            "missing": 0,
            "batches": 0,
            "translations_added": 0,
            "remaining": 0,
            "total_keys": len(existing),
            "written": False,
        }

        missing = diff_keys(messages, existing)
        if not missing:
            logger.info("no missing keys for locale", locale=locale)
            return result
        result["missing"] = len(missing)
        result["remaining"] = len(missing)
        logger.info("found missing keys", locale=locale, count=len(missing))

        if client is None:
            client = create_client(config, logger)

        translations = dict(existing)
        total_batches = count_batches(len(missing), config.batch_size)

        for batch_num, batch in enumerate(batch_messages(missing, config.batch_size), 1):
            logger.info(
                "processing batch",
                locale=locale,
                batch=batch_num,
                total_batches=total_batches,
                keys_in_batch=len(batch)
            )
            logger.log_request(locale, batch_num, [m.to_dict() for m in batch])

            try:
                batch_translations = translate_batch(
                    client,
                    batch,
                    locale,
                    config.model,
                    config.max_retries,
                    logger=logger,
                    batch_id=batch_num,
                    timeout=config.request_timeout
                )
            except RetryExhaustedError as e:
                raise LocaleSyncError(
                    locale,
                    f"translating batch {batch_num} for locale {locale}: {e}",
                    batch=batch_num,
                    cause=e
                ) from e

            stats = merge_translations(translations, batch_translations)
            result["batches"] += 1
            result["translations_added"] += stats["added"]
            result["remaining"] -= sum(1 for m in batch if m.key in batch_translations)
            logger.info(
                "batch completed",
                locale=locale,
                batch=batch_num,
                translations_added=len(batch_translations)
            )

        try:
            write_locale_file(locale_file, translations)
        except LocaleWriteError as e:
            raise LocaleSyncError(locale, f"syncing locale {locale}: {e}", cause=e) from e

        result["total_keys"] = len(translations)
        result["written"] = True
        logger.info("locale sync completed", locale=locale, total_keys=len(translations))

    return result
