"""Retry logic with exponential backoff for remote storage calls.

Provides a decorator that retries transient failures (rate limits, server
errors, network timeouts) with exponential backoff and jitter.
"""

import functools
import logging
import random
import time
from typing import Any, Callable, Set, Type, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# HTTP status codes that should trigger retry
RETRYABLE_STATUS_CODES: Set[int] = {
    429,  # Rate limit
    500,  # Server error
    502,  # Bad gateway
    503,  # Service unavailable
}

# HTTP status codes that should NOT trigger retry
NON_RETRYABLE_STATUS_CODES: Set[int] = {
    400,  # Bad request
    401,  # Unauthorized
    403,  # Forbidden
    404,  # Not found
    409,  # Conflict
    422,  # Unprocessable entity
}

NETWORK_ERROR_MARKERS = (
    "timeout",
    "timed out",
    "connection",
    "network",
)

MAX_RETRIES = 3
BASE_DELAY = 0.5  # seconds
MAX_JITTER = 0.5  # seconds


def retry_with_backoff(
    max_retries: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
    max_jitter: float = MAX_JITTER,
    retryable_exceptions: tuple[Type[Exception], ...] = (),
) -> Callable[[F], F]:
    """Decorator that retries a synchronous call with exponential backoff.

    An exception is retried when it carries a retryable HTTP status, looks
    like a network failure, or is an instance of ``retryable_exceptions``.
    The last exception is re-raised once ``max_retries`` is exhausted.

    Args:
        max_retries: Maximum number of retry attempts
        base_delay: Base delay in seconds, doubled on each attempt
        max_jitter: Maximum random jitter in seconds
        retryable_exceptions: Exception types that are always retried

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not should_retry_exception(e, retryable_exceptions):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "%s failed after %d retries: %s", func.__name__, max_retries, e
                        )
                        raise

                    delay = (base_delay * (2**attempt)) + (random.random() * max_jitter)
                    logger.warning(
                        "%s attempt %d/%d failed: %s. Retrying in %.2fs...",
                        func.__name__,
                        attempt + 1,
                        max_retries,
                        e,
                        delay,
                    )
                    time.sleep(delay)
            raise RuntimeError("Unexpected retry loop exit")

        return cast(F, wrapper)

    return decorator


def should_retry_exception(
    exception: Exception, retryable_exceptions: tuple[Type[Exception], ...] = ()
) -> bool:
    """Determine if an exception should trigger a retry."""
    status_code = extract_status_code(exception)
    if status_code is not None:
        if status_code in NON_RETRYABLE_STATUS_CODES:
            return False
        if status_code in RETRYABLE_STATUS_CODES:
            return True

    message = str(exception).lower()
    if any(marker in message for marker in NETWORK_ERROR_MARKERS):
        return True

    return bool(retryable_exceptions) and isinstance(exception, retryable_exceptions)


def extract_status_code(exception: Exception) -> int | None:
    """HTTP status code carried by an exception, if any.

    Looks at ``status_code``, an integer ``code`` (postgrest APIError uses a
    string code, which is ignored) and ``response.status_code``.
    """
    status_code = getattr(exception, "status_code", None)
    if isinstance(status_code, int):
        return status_code

    code = getattr(exception, "code", None)
    if isinstance(code, int):
        return code

    response = getattr(exception, "response", None)
    response_status = getattr(response, "status_code", None)
    if isinstance(response_status, int):
        return response_status

    return None
