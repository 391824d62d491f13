"""Bounded retry helper for awaitable calls."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts to make and how long to wait before each retry.

    ``delay`` receives the 1-based number of the attempt that just failed.
    """

    max_attempts: int
    delay: Callable[[int], float]

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


def linear_backoff(base: float) -> Callable[[int], float]:
    def _delay(attempt: int) -> float:
        return base * attempt

    return _delay


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Typed success/failure of a retried call."""

    value: Optional[T]
    error: Optional[BaseException]
    attempts: int

    @property
    def ok(self) -> bool:
        return self.error is None


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    should_retry: Callable[[BaseException], bool],
    sleep: SleepFn = asyncio.sleep,
) -> RetryOutcome[T]:
    """Call ``fn`` until it succeeds, a non-retryable error occurs, or attempts run out."""

    attempt = 0
    while True:
        attempt += 1
        try:
            value = await fn()
        except Exception as exc:  # noqa: BLE001
            if attempt >= policy.max_attempts or not should_retry(exc):
                return RetryOutcome(value=None, error=exc, attempts=attempt)
            wait = policy.delay(attempt)
            logger.warning(
                "Retrying after failure attempt=%d/%d wait=%.2fs error=%s",
                attempt,
                policy.max_attempts,
                wait,
                exc,
            )
            await sleep(wait)
            continue
        return RetryOutcome(value=value, error=None, attempts=attempt)


__all__ = ["RetryOutcome", "RetryPolicy", "linear_backoff", "retry_async"]
