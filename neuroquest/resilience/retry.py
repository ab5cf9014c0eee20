"""Retry logic with exponential backoff and jitter

Implements retry logic for optimistic-concurrency writes that:
1. Only retries conflicts (the state changed between read and write)
2. Uses exponential backoff with jitter so competing writers spread out
3. Gives up after max retries to avoid infinite loops

The retried callable must re-read state on every attempt; a result computed
from a stale snapshot is never replayed.
"""

import asyncio
import random
import logging
from typing import Awaitable, Callable, Any, TypeVar

from neuroquest.config import MAX_COMMIT_RETRIES, RETRY_BASE_DELAY
from neuroquest.exceptions import NeuroQuestError

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Retry configuration
MAX_RETRIES = MAX_COMMIT_RETRIES
BASE_DELAY = RETRY_BASE_DELAY  # seconds
MAX_DELAY = 2.0  # seconds
JITTER = 0.1  # 10% random jitter


def is_retryable_error(exc: Exception) -> bool:
    """
    Determine if error is transient and should be retried.

    Retryable errors:
    - PersistenceConflictError (concurrent modification)

    Non-retryable errors:
    - AlreadyCompletedError, OwnershipError
    - ValidationError, InsufficientFundsError
    - Anything outside the neuroquest hierarchy

    Args:
        exc: The exception to check

    Returns:
        True if error should be retried, False otherwise
    """
    if isinstance(exc, NeuroQuestError):
        return exc.is_retryable

    return False


def calculate_backoff(attempt: int, base_delay: float = BASE_DELAY) -> float:
    """
    Calculate exponential backoff delay with jitter.

    Formula: delay = min(base_delay * (2 ** attempt), MAX_DELAY) + jitter
    Jitter is random value between -10% and +10% of delay

    Args:
        attempt: The retry attempt number (0-indexed)
        base_delay: Delay of the first retry in seconds

    Returns:
        Delay in seconds
    """
    # Exponential backoff
    delay = min(base_delay * (2 ** attempt), MAX_DELAY)

    # Add jitter to prevent thundering herd
    jitter_amount = random.uniform(-JITTER * delay, JITTER * delay)
    final_delay = delay + jitter_amount

    return max(final_delay, 0.0)  # Ensure non-negative


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_retries: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
    **kwargs: Any
) -> T:
    """
    Retry async function with exponential backoff.

    Only retries retryable errors. Gives up after max_retries attempts.

    Args:
        func: Async function to retry
        max_retries: Maximum number of retry attempts
        base_delay: Delay of the first retry in seconds
        *args, **kwargs: Arguments to pass to func

    Returns:
        Result from func

    Raises:
        Last exception if all retries exhausted or non-retryable error

    Example:
        outcome = await retry_with_backoff(self._attempt_completion, user_id, quest_id)
    """
    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)

        except Exception as e:
            # Check if error is retryable
            if not is_retryable_error(e):
                raise

            # If this was the last attempt, give up
            if attempt == max_retries:
                logger.error(
                    f"[RETRY] All {max_retries} retries exhausted for {func.__name__}"
                )
                raise

            backoff = calculate_backoff(attempt, base_delay)

            logger.info(
                f"[RETRY] Attempt {attempt + 1}/{max_retries} for {func.__name__} "
                f"after {backoff:.3f}s (error: {type(e).__name__})"
            )

            await asyncio.sleep(backoff)

    raise RuntimeError("Retry logic failed unexpectedly")
