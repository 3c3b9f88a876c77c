"""
Sui Toolbox - Retry Combinator

Retries a callable under a backoff function and an overall wall-clock budget.
A predicate decides which failures are retryable; anything else is raised
immediately on the attempt that produced it.

Usage:
    policy = RetryPolicy(
        backoff=exponential_backoff(),
        timeout=60.0,
        retry_if=lambda e: not isinstance(e, FaucetRateLimitError),
    )
    result = retry(lambda: client.request_sui(address), policy)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# attempt index (0-based) -> seconds to sleep before the next attempt
Backoff = Callable[[int], float]


def exponential_backoff(initial: float = 0.1, factor: float = 2.0, max_delay: float = 10.0) -> Backoff:
    """Delays of initial, initial*factor, initial*factor^2, ... capped at max_delay."""
    def backoff(attempt: int) -> float:
        return min(initial * (factor ** attempt), max_delay)
    return backoff


def fixed_backoff(delay: float) -> Backoff:
    def backoff(attempt: int) -> float:
        return delay
    return backoff


def _always(error: BaseException) -> bool:
    return True


class RetryTimeoutError(Exception):
    """The retry budget ran out while failures were still retryable."""

    def __init__(self, message: str, attempts: int, last_error: BaseException):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


@dataclass
class RetryPolicy:
    """
    How retry() behaves.

    Attributes:
        backoff: Delay before attempt n+1, given failed attempt index n
        timeout: Overall budget in seconds, measured from the first attempt
        retry_if: True if the error is transient and worth another attempt
        max_attempts: Optional hard cap on attempts (None = budget only)
        on_retry: Called with (attempt_number, delay, error) before each sleep
        sleep: Injected for tests
        clock: Monotonic clock, injected for tests
    """

    backoff: Backoff = field(default_factory=exponential_backoff)
    timeout: float = 60.0
    retry_if: Callable[[BaseException], bool] = _always
    max_attempts: Optional[int] = None
    on_retry: Optional[Callable[[int, float, BaseException], None]] = None
    sleep: Callable[[float], None] = time.sleep
    clock: Callable[[], float] = time.monotonic


def retry(fn: Callable[[], T], policy: RetryPolicy) -> T:
    """
    Call fn until it succeeds, a non-retryable error occurs, or the budget runs out.

    Never sleeps past the deadline: once an attempt ends at or after it, or the
    next delay would cross it, gives up right away. Bounding the attempts
    themselves is up to fn (see deadline_for).

    Raises:
        The first non-retryable error, unchanged
        RetryTimeoutError: Budget or max_attempts exhausted (chained to the last error)
    """
    deadline = policy.clock() + policy.timeout
    attempt = 0

    while True:
        try:
            return fn()
        except Exception as e:
            if not policy.retry_if(e):
                logger.debug(f"Not retrying {type(e).__name__}: {e}")
                raise

            attempt += 1
            if policy.max_attempts is not None and attempt >= policy.max_attempts:
                raise RetryTimeoutError(
                    f"Gave up after {attempt} attempts: {e}", attempt, e
                ) from e

            # The attempt itself may have used up the budget
            delay = policy.backoff(attempt - 1)
            now = policy.clock()
            if now >= deadline or now + delay >= deadline:
                raise RetryTimeoutError(
                    f"Timed out after {policy.timeout}s ({attempt} attempts): {e}", attempt, e
                ) from e

            if policy.on_retry is not None:
                policy.on_retry(attempt, delay, e)
            policy.sleep(delay)


def deadline_for(policy: RetryPolicy) -> Callable[[], float]:
    """
    Start a budget clock for policy; returns a function giving the seconds left.

    Callers use it to cap each attempt (e.g. a request timeout) so that an
    attempt cannot run past the overall deadline.
    """
    deadline = policy.clock() + policy.timeout

    def remaining() -> float:
        return max(deadline - policy.clock(), 0.0)

    return remaining
