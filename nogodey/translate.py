"""Translate a batch of messages with bounded retries."""

import time
from typing import List, Dict, Optional

from nogodey.errors import BackendError, ParseError, RetryExhaustedError
from nogodey.messages import Message
from nogodey.prompts.translate import build_translation_prompt
from nogodey.providers.base import TranslationClient, DEFAULT_TIMEOUT
from nogodey.run_logging import RunLogger
from nogodey.validate.response import parse_translation_response


def backoff_seconds(attempt: int) -> float:
    """
    Delay before a given 1-based attempt.

    The first attempt runs immediately; attempt n > 1 waits 2^(n-1) seconds.
    """
    if attempt <= 1:
        return 0.0
    return float(2 ** (attempt - 1))


def translate_batch(
    client: TranslationClient,
    batch: List[Message],
    locale: str,
    model: str,
    max_retries: int,
    logger: Optional[RunLogger] = None,
    batch_id: int = 1,
    timeout: float = DEFAULT_TIMEOUT
) -> Dict[str, str]:
    """
    Translate one batch, retrying backend and parse failures.

    The prompt is built once and reused for every attempt.

    Args:
        client: Translation backend
        batch: Messages to translate
        locale: Target locale
        model: Model identifier passed to the client
        max_retries: Total number of attempts allowed (>= 1)
        logger: Optional run logger
        batch_id: 1-based batch number, for logging
        timeout: Per-call deadline in seconds

    Returns:
        Parsed key -> translation mapping from the first successful attempt

    Raises:
        RetryExhaustedError: If all attempts fail
    """
    prompt = build_translation_prompt(batch, locale)
    last_error: Optional[Exception] = None

    for attempt in range(1, max_retries + 1):
        if attempt > 1:
            delay = backoff_seconds(attempt)
            if logger:
                logger.info(
                    "retrying translation",
                    locale=locale,
                    batch=batch_id,
                    attempt=attempt,
                    backoff_seconds=delay
                )
            time.sleep(delay)

        response_text = None
        try:
            response_text = client.complete(prompt, model, timeout=timeout)
            translations = parse_translation_response(response_text)
        except (BackendError, ParseError) as e:
            last_error = e
            if logger:
                if response_text is not None:
                    logger.log_response(locale, batch_id, attempt, response_text)
                logger.log_failure(locale, batch_id, e.stage, str(e), {"attempt": attempt})
                logger.warn(
                    "translation attempt failed",
                    locale=locale,
                    batch=batch_id,
                    attempt=attempt,
                    error=str(e)
                )
            continue

        if logger:
            logger.log_response(locale, batch_id, attempt, response_text, translations)
            logger.info(
                "translation successful",
                locale=locale,
                batch=batch_id,
                attempt=attempt,
                translations_count=len(translations)
            )
        return translations

    raise RetryExhaustedError(max_retries, last_error) from last_error
