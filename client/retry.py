"""
Retry policy with exponential backoff.

with_retry(fn, policy) calls fn until it succeeds, the error is not retryable, or
policy.max_attempts attempts have been made. Attempts are strictly sequential:
the delay before attempt N+1 is base_delay_ms * multiplier ** (N - 1), so the
default policy waits 1s then 2s.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from client.errors import categorize_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_retryable_error(error: BaseException) -> bool:
    """Default retry predicate: defer to the classified error's retryable flag."""
    return categorize_error(error).retryable


@dataclass
class RetryPolicy:
    max_attempts: int = 3
    base_delay_ms: int = 1000
    multiplier: float = 2
    retry_predicate: Callable[[BaseException], bool] = field(default=is_retryable_error)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")

    def delay_ms(self, attempt: int) -> float:
        """Delay after failed attempt number ``attempt`` (1-based)."""
        return self.base_delay_ms * (self.multiplier ** (attempt - 1))

    def delays_ms(self) -> List[float]:
        """Every delay the policy can wait, in order."""
        return [self.delay_ms(attempt) for attempt in range(1, self.max_attempts)]


NO_RETRY = RetryPolicy(max_attempts=1)


def with_retry(
    fn: Callable[[], T],
    policy: Optional[RetryPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call fn, retrying retryable failures according to policy.

    Args:
        fn: Zero-argument callable performing one attempt
        policy: RetryPolicy (defaults to RetryPolicy())
        sleep: Sleep function taking seconds (injectable for tests)

    Returns:
        fn's result from the first successful attempt

    Raises:
        The last error raised by fn, unchanged
    """
    policy = policy or RetryPolicy()
    attempt = 1
    while True:
        try:
            return fn()
        except Exception as e:
            if attempt >= policy.max_attempts or not policy.retry_predicate(e):
                raise
            delay = policy.delay_ms(attempt)
            logger.info(
                "Attempt %d/%d failed (%s), retrying in %dms",
                attempt,
                policy.max_attempts,
                e,
                delay,
            )
            sleep(delay / 1000)
            attempt += 1
