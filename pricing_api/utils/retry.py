"""
Retry policy shared by the upstream repositories.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from ..config import RetryConfig
from ..exceptions import UpstreamFailure

T = TypeVar("T")

logger = logging.getLogger(__name__)


def exponential_backoff(base_seconds: float = 1.0, multiplier: float = 2.0,
                        max_seconds: float = 30.0) -> Callable[[int], float]:
    """Build a backoff function: attempt 1 waits base, then base*multiplier, ..."""
    def backoff(attempt: int) -> float:
        return min(max_seconds, base_seconds * (multiplier ** (attempt - 1)))
    return backoff


@dataclass
class RetryPolicy:
    """
    Re-invoke a call on retryable upstream failures.

    Only ``UpstreamFailure`` with ``retryable`` set is retried; every other
    exception propagates on the first attempt.

    Attributes:
        max_attempts: Total attempts including the first one
        backoff: Seconds to wait after failed attempt N (1-based)
        sleep: Wait function, replaceable in tests
    """

    max_attempts: int = 3
    backoff: Callable[[int], float] = field(default_factory=exponential_backoff)
    sleep: Callable[[float], None] = time.sleep

    @classmethod
    def from_config(cls, config: RetryConfig, sleep: Callable[[float], None] = time.sleep) -> "RetryPolicy":
        return cls(
            max_attempts=max(1, config.max_attempts),
            backoff=exponential_backoff(
                config.backoff_seconds,
                config.backoff_multiplier,
                config.max_backoff_seconds
            ),
            sleep=sleep
        )

    def call(self, func: Callable[[], T], description: str = "upstream call") -> T:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return func()
            except UpstreamFailure as e:
                if not e.retryable or attempt == self.max_attempts:
                    raise
                wait = self.backoff(attempt)
                logger.warning(
                    f"{description} failed (attempt {attempt}/{self.max_attempts}): "
                    f"{e.detail} - retrying in {wait:.1f}s")
                self.sleep(wait)

        # max_attempts >= 1 always returns or raises above
        raise RuntimeError("RetryPolicy exhausted without a result")
