"""Retry policy for completion calls."""

from dataclasses import dataclass
from enum import Enum

from persona_debate.config import RetryConfig

RATE_LIMIT_STATUS = 429


class StatusClass(Enum):
    """What to do with an endpoint status."""

    SUCCESS = "success"
    RETRY = "retry"
    FAIL = "fail"


class CallState(Enum):
    """States of a single completion call."""

    PREPARING = "preparing"
    WAITING_JITTER = "waiting_jitter"
    CALLING = "calling"
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    BACKOFF = "backoff"
    HARD_FAILURE = "hard_failure"


@dataclass(frozen=True)
class RetryPolicy:
    """Jittered exponential backoff on rate limiting.

    Only the rate-limit status is retried. Any other non-2xx status is a
    permanent failure.

    Attributes:
        max_attempts: Attempt count at which rate limiting becomes fatal.
        backoff_base_seconds: Backoff after attempt ``n`` is ``base ** n``.
        max_jitter_seconds: Jitter before each attempt is drawn from
            ``[0, max_jitter_seconds)``.
    """

    max_attempts: int = 10
    backoff_base_seconds: float = 2.0
    max_jitter_seconds: float = 0.5

    @classmethod
    def from_config(cls, config: RetryConfig) -> "RetryPolicy":
        return cls(
            max_attempts=config.max_attempts,
            backoff_base_seconds=config.backoff_base_seconds,
            max_jitter_seconds=config.max_jitter_ms / 1000,
        )

    def classify(self, status_code: int) -> StatusClass:
        """Classify an endpoint status.

        Args:
            status_code: HTTP status code.

        Returns:
            SUCCESS for 2xx, RETRY for rate limiting, FAIL otherwise.
        """
        if 200 <= status_code < 300:
            return StatusClass.SUCCESS
        if status_code == RATE_LIMIT_STATUS:
            return StatusClass.RETRY
        return StatusClass.FAIL

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after the given rate-limited attempt (1-based)."""
        return self.backoff_base_seconds**attempt

    def jitter_delay(self, random_value: float) -> float:
        """Scale a ``[0, 1)`` random value to the jitter window."""
        return random_value * self.max_jitter_seconds

    def is_exhausted(self, attempt: int) -> bool:
        """Whether ``attempt`` rate-limited attempts reach the ceiling."""
        return attempt >= self.max_attempts
