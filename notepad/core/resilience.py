"""
Resilience Infrastructure.

Retry policy and retry callback used by the remote note repository.

Reads and deletes against the remote backend are retried on transport
errors with exponential backoff. Creates are never retried: a POST that
reached the server but lost its response would produce a duplicate note.

Usage:
    from notepad.core.resilience import build_retrying

    async for attempt in build_retrying(max_attempts=3):
        with attempt:
            response = await client.request("GET", path)
"""

from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from notepad.core.logging import get_logger

logger = get_logger(__name__)

RETRYABLE_ERRORS = (httpx.TransportError,)


def log_retry(retry_state: Any) -> None:
    """Tenacity before_sleep callback that emits structured retry events.

    Pass this as `before_sleep=log_retry` in any retry policy.

    Args:
        retry_state: tenacity.RetryCallState instance
    """
    duration_ms = None
    if retry_state.outcome_timestamp and retry_state.start_time:
        duration_ms = round(
            (retry_state.outcome_timestamp - retry_state.start_time) * 1000
        )

    error = None
    if retry_state.outcome and retry_state.outcome.failed:
        error = str(retry_state.outcome.exception())

    fn_name = getattr(retry_state.fn, "__name__", "remote-notes")

    logger.warning(
        f"Retrying {fn_name} (attempt {retry_state.attempt_number})",
        extra={
            "resilience_event": "retry_attempt",
            "dependency": fn_name,
            "attempt": retry_state.attempt_number,
            "duration_ms": duration_ms,
            "error": error,
        },
    )


def build_retrying(
    max_attempts: int = 3,
    backoff_multiplier: float = 1,
    backoff_max: float = 10,
) -> AsyncRetrying:
    """Create an async retry policy for transport-level failures.

    The last exception is re-raised once attempts are exhausted so callers
    can translate it into an application error.

    Args:
        max_attempts: Total attempts including the first call
        backoff_multiplier: Multiplier for exponential wait between attempts
        backoff_max: Upper bound for a single wait, in seconds
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=backoff_multiplier, max=backoff_max),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        before_sleep=log_retry,
        reraise=True,
    )
