"""Resilience patterns for persistence writes

Retry with backoff for optimistic-concurrency conflicts.
"""

from neuroquest.resilience.retry import (
    calculate_backoff,
    is_retryable_error,
    retry_with_backoff,
)

__all__ = [
    "calculate_backoff",
    "is_retryable_error",
    "retry_with_backoff",
]
