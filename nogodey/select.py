"""Compute missing keys and batching strategy."""

import math
from typing import List, Mapping, Iterator

from nogodey.messages import Message


def diff_keys(
    messages: List[Message],
    existing: Mapping[str, str]
) -> List[Message]:
    """
    Get the messages whose key is absent from an existing locale mapping.

    Args:
        messages: Canonical messages in extraction order
        existing: Current key -> translation mapping for a locale

    Returns:
        Missing messages, in the same relative order as `messages`
    """
    return [message for message in messages if message.key not in existing]


def count_batches(total: int, batch_size: int) -> int:
    """Number of batches needed for `total` items."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    return math.ceil(total / batch_size)


def batch_messages(
    items: List[Message],
    batch_size: int
) -> Iterator[List[Message]]:
    """
    Split items into contiguous batches with stable ordering.

    Batch i covers items[i * batch_size:(i + 1) * batch_size]; only the
    last batch may be shorter.

    Args:
        items: Messages to batch
        batch_size: Maximum items per batch

    Yields:
        Lists of messages
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    for i in range(0, len(items), batch_size):
        yield items[i:i + batch_size]
