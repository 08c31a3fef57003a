"""Backoff retrier for page requests.

Runs a request until it yields a page, retrying rate-limited and
retryable outcomes:
- Exponential delay for retryable outcomes (0.5s doubling, capped at 50s)
- Twice the server's Retry-After for rate-limited outcomes
- At most 5 retries (6 attempts)
- Unauthorized and fatal outcomes are raised immediately

The sleep function is injected so backoff can be tested without waiting.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..config.constants import RATE_LIMIT_DELAY_FACTOR
from ..core.errors import (
    MalformedResponseError,
    NetworkError,
    PipelineError,
    RateLimitError,
    RetriesExhaustedError,
    UnauthorizedError,
)
from ..core.types import OutcomeKind, Page, RetryOutcome
from ..observability.logger import get_logger
from .backoff import REGISTRY_BACKOFF, BackoffPolicy
from .classifier import is_retryable

logger = get_logger(__name__)

RetryHook = Callable[[int, RetryOutcome], None]


@dataclass
class BackoffRetrier:
    """Retry executor driven by classified outcomes.

    Usage:
        retrier = BackoffRetrier()
        page = retrier.execute(lambda: client.fetch(3), page_number=3)

    After each call `attempts`, `total_delay` and `last_outcome` describe
    what happened.
    """

    # Configuration
    policy: BackoffPolicy = field(default_factory=lambda: REGISTRY_BACKOFF)
    sleep: Callable[[float], None] = time.sleep
    on_retry: RetryHook | None = None

    # State
    attempts: int = field(default=0, init=False)
    total_delay: float = field(default=0.0, init=False)
    last_outcome: RetryOutcome | None = field(default=None, init=False)

    def execute(
        self,
        request: Callable[[], RetryOutcome],
        *,
        page_number: int | None = None,
    ) -> Page:
        """Run the request until it succeeds or cannot be retried.

        Args:
            request: Issues one request and classifies its response
            page_number: Page being fetched, attached to raised errors

        Returns:
            The fetched page

        Raises:
            UnauthorizedError: On an unauthorized outcome
            MalformedResponseError: On a fatal outcome
            RetriesExhaustedError: When the retry budget is spent
        """
        self.attempts = 0
        self.total_delay = 0.0
        self.last_outcome = None
        retries = 0
        max_attempts = self.policy.max_attempts() + 1

        while True:
            self.attempts += 1
            outcome = request()
            self.last_outcome = outcome

            if outcome.kind is OutcomeKind.SUCCESS and outcome.page is not None:
                return outcome.page

            if not is_retryable(outcome.kind):
                raise self._fatal_error(outcome, page_number)

            if not self.policy.should_retry(retries):
                logger.error(
                    f"Retries exceeded after {self.attempts} attempts: {outcome.message}",
                    extra={"attempts": self.attempts, "reason": outcome.kind.value},
                )
                raise RetriesExhaustedError(
                    f"Retries exhausted after {self.attempts} attempts: {outcome.message}",
                    attempts=self.attempts,
                    last_reason=outcome.message,
                    page_number=page_number,
                ) from self._cause(outcome, page_number)

            delay = self.delay_for(outcome, retries)
            logger.warning(
                f"Retrying request (attempt {self.attempts + 1}/{max_attempts}) "
                f"in {delay:.1f}s: {outcome.message}",
                extra={"attempt": self.attempts, "reason": outcome.kind.value},
            )
            if self.on_retry is not None:
                self.on_retry(self.attempts, outcome)

            self.sleep(delay)
            self.total_delay += delay
            retries += 1

    def delay_for(self, outcome: RetryOutcome, retry: int) -> float:
        """Seconds to wait before retry number `retry` (0-indexed).

        Rate-limited outcomes override the exponential schedule.
        """
        if outcome.kind is OutcomeKind.RATE_LIMITED:
            return outcome.retry_after_ms * RATE_LIMIT_DELAY_FACTOR / 1000
        return self.policy.next_delay(retry)

    @staticmethod
    def _fatal_error(outcome: RetryOutcome, page_number: int | None) -> PipelineError:
        if outcome.kind is OutcomeKind.UNAUTHORIZED:
            return UnauthorizedError(outcome.message, page_number=page_number)
        return MalformedResponseError(
            outcome.message or "Request returned no page", page_number=page_number
        )

    @staticmethod
    def _cause(outcome: RetryOutcome, page_number: int | None) -> Exception:
        if outcome.error is not None:
            return outcome.error
        if outcome.kind is OutcomeKind.RATE_LIMITED:
            return RateLimitError(
                outcome.message,
                retry_after_ms=outcome.retry_after_ms,
                page_number=page_number,
            )
        return NetworkError(outcome.message, page_number=page_number)
