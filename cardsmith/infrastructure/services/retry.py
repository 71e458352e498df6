"""cardsmith.infrastructure.services.retry

Name: Retry policy for the segmentation provider

Responsibilities:
  - Classify provider failures as transient (retry) or permanent (fail fast)
  - Build a tenacity decorator with exponential backoff + jitter
  - Log every retry before sleeping

Collaborators:
  - tenacity
  - crosscutting.config.get_settings (attempts/delays)
  - GoogleCardSplitter (decorates the generate_content call)

Constraints:
  - A cancellation is never retried: the use case turns it into a fallback.
  - A malformed payload is never retried: asking again rarely fixes it.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...crosscutting.config import get_settings
from ...crosscutting.exceptions import SegmentationResponseError
from ...crosscutting.logger import logger

T = TypeVar("T")

# 408 timeout, 429 quota, 5xx provider side.
TRANSIENT_HTTP_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})
# Bad request / bad key / no access / unknown model.
PERMANENT_HTTP_CODES: frozenset[int] = frozenset({400, 401, 403, 404})

_NEVER_RETRY = (asyncio.CancelledError, SegmentationResponseError)

_TRANSIENT_HINTS = (
    "timeout",
    "timed out",
    "deadline",
    "connection",
    "unavailable",
    "resource exhausted",
    "resourceexhausted",
    "rate limit",
    "too many requests",
    "quota",
)


def get_http_status_code(exception: BaseException) -> int | None:
    """HTTP status of a provider error, if it carries one.

    google-genai's APIError exposes `code`; httpx-style errors expose
    `response.status_code`; some wrappers expose `status_code` directly.
    """
    candidates = (
        getattr(exception, "code", None),
        getattr(getattr(exception, "response", None), "status_code", None),
        getattr(exception, "status_code", None),
    )
    for candidate in candidates:
        # gRPC codes are small ints; only HTTP statuses count here.
        if isinstance(candidate, int) and candidate >= 100:
            return candidate
    return None


def is_transient_error(exception: BaseException) -> bool:
    if isinstance(exception, _NEVER_RETRY):
        return False

    status = get_http_status_code(exception)
    if status in PERMANENT_HTTP_CODES:
        return False
    if status in TRANSIENT_HTTP_CODES:
        return True

    if isinstance(exception, (TimeoutError, ConnectionError)):
        return True

    haystack = f"{type(exception).__name__} {exception}".lower()
    return any(hint in haystack for hint in _TRANSIENT_HINTS)


def _log_retry(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome is not None else None
    sleep = state.next_action.sleep if state.next_action is not None else 0.0
    logger.warning(
        "Retrying segmentation provider call",
        extra={
            "function": getattr(state.fn, "__name__", "unknown"),
            "attempt": state.attempt_number,
            "wait_seconds": round(float(sleep), 2),
            "error_type": type(error).__name__ if error else None,
        },
    )


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int
    base_delay: float
    max_delay: float

    def __post_init__(self) -> None:
        if self.max_attempts <= 0:
            raise ValueError("max_attempts must be > 0")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if self.max_delay <= 0:
            raise ValueError("max_delay must be > 0")

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        settings = get_settings()
        return cls(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay_seconds,
            max_delay=settings.retry_max_delay_seconds,
        )

    def decorator(self) -> Callable[[Callable[..., T]], Callable[..., T]]:
        """tenacity decorator; works on plain functions and coroutines."""
        return retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=float(self.base_delay),
                max=float(self.max_delay),
                jitter=float(self.base_delay),
            ),
            retry=retry_if_exception(is_transient_error),
            before_sleep=_log_retry,
            reraise=True,
        )


def create_retry_decorator(
    max_attempts: Optional[int] = None,
    base_delay: Optional[float] = None,
    max_delay: Optional[float] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry decorator; unspecified values come from settings."""
    overrides = {
        "max_attempts": max_attempts,
        "base_delay": base_delay,
        "max_delay": max_delay,
    }
    if None in overrides.values():
        defaults = RetryPolicy.from_settings()
        overrides = {k: getattr(defaults, k) if v is None else v for k, v in overrides.items()}
    return RetryPolicy(**overrides).decorator()


def no_retry(func: Callable[..., Any]) -> Callable[..., Any]:
    return func
