"""Retry decorator with exponential backoff for provider calls."""
from __future__ import annotations

import functools
import logging
import random
import time
from typing import Any, Callable, Tuple, Type

import requests

logger = logging.getLogger(__name__)

# Network-level failures worth another attempt. HTTP status handling is left
# to each client, which raises ``TransientHTTPError`` for 429/5xx.
NETWORK_ERRORS: Tuple[Type[BaseException], ...] = (requests.RequestException, OSError)


class TransientHTTPError(requests.HTTPError):
    """A provider answered 429 or 5xx; the request may succeed if repeated."""


def raise_for_transient(response: requests.Response) -> None:
    if response.status_code == 429 or response.status_code >= 500:
        raise TransientHTTPError(
            f"{response.status_code} from {response.url}", response=response
        )


def backoff_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    backoff_factor: float,
    jitter: bool,
) -> float:
    """Pause after failed ``attempt`` (1-based), capped before jitter is applied."""
    delay = min(base_delay * backoff_factor ** (attempt - 1), max_delay)
    return delay * (0.5 + random.random()) if jitter else delay


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = NETWORK_ERRORS,
    sleep: Callable[[float], None] | None = None,
) -> Callable:
    """Decorator: call again on ``retryable`` errors, sleeping between attempts.

    The last exception is re-raised once ``max_attempts`` is exhausted; the
    caller decides whether that means "no data" or a hard failure.
    """

    def decorator(fn: Callable) -> Callable:
        name = fn.__qualname__

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            pause = sleep or time.sleep
            attempt = 1
            while True:
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    if attempt >= max_attempts:
                        logger.error("%s gave up after %d attempts: %s", name, attempt, exc)
                        raise
                    delay = backoff_delay(attempt, base_delay, max_delay, backoff_factor, jitter)
                    logger.warning(
                        "%s failed (%s); attempt %d of %d, next try in %.1fs",
                        name, exc, attempt, max_attempts, delay,
                    )
                    pause(delay)
                    attempt += 1

        return wrapper

    return decorator
