"""Retries for page and API fetches.

Only network failures are retried. An HTTP error status is an answer, not a
failure, and goes back to the caller untouched.
"""

from typing import Any

import logfire
import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)


def fetch_retryer(max_attempts: int = 3, wait_min: float = 1.0, wait_max: float = 10.0) -> Retrying:
    """Build a retryer for one fetch.

    Backs off exponentially between attempts and re-raises the last network
    error once attempts run out.

    Args:
        max_attempts: Attempts including the first one
        wait_min: Shortest pause between attempts, in seconds
        wait_max: Longest pause between attempts, in seconds

    """
    return Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(min=wait_min, max=wait_max),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        before_sleep=_log_fetch_retry,
        reraise=True,
    )


def _log_fetch_retry(retry_state: Any) -> None:
    error = retry_state.outcome.exception()
    logfire.warn(
        'Retrying fetch after network error',
        attempt=retry_state.attempt_number,
        error_type=type(error).__name__,
        error=str(error),
    )
