"""Backoff policies for retrying page requests."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..config.constants import (
    BACKOFF_BASE_DELAY,
    BACKOFF_MAX_DELAY,
    BACKOFF_MULTIPLIER,
    MAX_RETRIES,
)


class BackoffPolicy(ABC):
    """Abstract base for backoff policies.

    A backoff policy determines how long to wait between retry attempts.
    """

    @abstractmethod
    def next_delay(self, attempt: int) -> float:
        """Calculate delay for the next retry attempt.

        Args:
            attempt: The retry number (0-indexed)

        Returns:
            Delay in seconds before the next attempt
        """
        ...

    @abstractmethod
    def max_attempts(self) -> int:
        """Maximum number of retry attempts allowed."""
        ...

    def should_retry(self, attempt: int) -> bool:
        """Check if another retry attempt should be made."""
        return attempt < self.max_attempts()


@dataclass
class ExponentialBackoff(BackoffPolicy):
    """Exponential backoff with a delay cap.

    delay = min(base * (multiplier ^ attempt), max_delay)

    Example with defaults:
        attempt 0: 0.5s
        attempt 1: 1s
        attempt 2: 2s
        attempt 3: 4s
        attempt 4: 8s
    """

    base: float = BACKOFF_BASE_DELAY  # Base delay in seconds
    multiplier: float = BACKOFF_MULTIPLIER
    max_delay: float = BACKOFF_MAX_DELAY
    max_attempts_val: int = MAX_RETRIES

    def next_delay(self, attempt: int) -> float:
        """Calculate capped exponential delay."""
        return min(self.base * (self.multiplier**attempt), self.max_delay)

    def max_attempts(self) -> int:
        return self.max_attempts_val


@dataclass
class NoBackoff(BackoffPolicy):
    """No backoff - immediate retry (for testing)."""

    max_attempts_val: int = MAX_RETRIES

    def next_delay(self, attempt: int) -> float:
        return 0.0

    def max_attempts(self) -> int:
        return self.max_attempts_val


# Schedule used against the trademark registry: 0.5s doubling, capped at 50s, 5 retries
REGISTRY_BACKOFF = ExponentialBackoff()
