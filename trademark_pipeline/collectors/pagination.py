"""Pagination driver for the trademark register.

Walks the register one page at a time:

    Start -> Fetching(n) -> Evaluating(page) -> Fetching(n+1) | Stopped(reason)

Each page is fetched through the BackoffRetrier and handed to the
DuplicateTracker. After every page the stop conditions are checked in
priority order:

1. End of data: empty page or fewer results than the page size
2. Page cap: a page numbered above max_page_number was processed
3. Duplicate threshold: more than max_duplicates duplicates observed

Any error raised while fetching or processing a page ends the run.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable
from functools import partial
from typing import Protocol

import httpx

from ..config.constants import FIRST_PAGE_NUMBER, MAX_DUPLICATES, MAX_PAGE_NUMBER
from ..config.settings import Settings
from ..core.errors import PipelineError
from ..core.types import OutcomeKind, Page, PaginationState, RetryOutcome, RunResult, StopReason
from ..observability.logger import get_logger, log_context
from ..observability.metrics import RunMetrics
from ..processors.duplicates import DuplicateTracker
from ..rate_limit.retrier import BackoffRetrier
from ..sources.trademark_api import TrademarkApiClient

logger = get_logger(__name__)


class PageFetcher(Protocol):
    """Anything that can request one page and classify the response."""

    def fetch(self, page_number: int) -> RetryOutcome: ...


class PaginationDriver:
    """Owns the fetch loop and decides when to stop."""

    def __init__(
        self,
        fetcher: PageFetcher,
        retrier: BackoffRetrier | None = None,
        tracker: DuplicateTracker | None = None,
        max_page_number: int = MAX_PAGE_NUMBER,
        max_duplicates: int = MAX_DUPLICATES,
        metrics: RunMetrics | None = None,
    ):
        """
        Initialize the driver.

        Args:
            fetcher: Issues single page requests
            retrier: Retries a page request (default: registry backoff)
            tracker: Duplicate tracker for this run (default: fresh tracker)
            max_page_number: Stop after processing a page numbered above this
            max_duplicates: Stop once more duplicates than this were observed
            metrics: Optional metrics to update per page
        """
        self.fetcher = fetcher
        self.retrier = retrier or BackoffRetrier()
        self.tracker = tracker or DuplicateTracker()
        self.max_page_number = max_page_number
        self.max_duplicates = max_duplicates
        self.metrics = metrics

        self.state = PaginationState(current_page_number=FIRST_PAGE_NUMBER)
        self._stop_reason: StopReason | None = None

    @property
    def stopped(self) -> bool:
        return self._stop_reason is not None

    def run(self) -> RunResult:
        """Fetch pages until a stop condition is met.

        Returns:
            RunResult with the stop reason and final state

        Raises:
            PipelineError: Any fatal failure while fetching or processing
            RuntimeError: If the driver already ran to a stop
        """
        if self.stopped:
            raise RuntimeError(f"Pagination already stopped: {self._stop_reason.value}")

        page_number = FIRST_PAGE_NUMBER
        total_hits: int | None = None

        while True:
            self.state.current_page_number = page_number
            with log_context(page_number=page_number):
                page = self.retrier.execute(
                    partial(self.fetcher.fetch, page_number), page_number=page_number
                )

                if total_hits is None:
                    total_hits = page.total_hits_count
                    logger.info(f"Total number of hits: {total_hits}")
                    if self.metrics is not None:
                        self.metrics.total_hits = total_hits

                self._evaluate(page)
                reason = self._check_stop(page)

            if reason is not None:
                self._stop_reason = reason
                return RunResult(stop_reason=reason, total_hits=total_hits, state=self.state)

            page_number = page.next_page_number

    def _evaluate(self, page: Page) -> None:
        """Hand a page to the tracker and update the loop state."""
        try:
            self.state.duplicate_count = self.tracker.process(page)
        except PipelineError as e:
            if e.page_number is None:
                e.page_number = page.page_number
            raise

        self.state.current_page_number = page.page_number
        self.state.pages_processed += 1

        if self.metrics is not None:
            found = self.tracker.last_duplicates
            self.metrics.record_page(
                record_count=len(page.results),
                duplicates=len(found),
                mismatches=sum(1 for d in found if not d.content_identical),
            )

    def _check_stop(self, page: Page) -> StopReason | None:
        """Apply the stop conditions in priority order."""
        if page.is_last:
            logger.info(
                f"Last page reached: page {page.page_number} has "
                f"{len(page.results)}/{page.page_size} results. Stopping.",
                extra={"stop_reason": StopReason.END_OF_DATA.value},
            )
            return StopReason.END_OF_DATA

        if page.page_number > self.max_page_number:
            logger.info(
                f"Processed > {self.max_page_number} pages "
                f"({self.state.pages_processed} this run). Stopping.",
                extra={"stop_reason": StopReason.PAGE_CAP.value},
            )
            return StopReason.PAGE_CAP

        if self.state.duplicate_count > self.max_duplicates:
            logger.error(
                f"Observed more than {self.max_duplicates} duplicates "
                f"({self.state.duplicate_count}), pages may overlap. Stopping.",
                extra={"stop_reason": StopReason.DUPLICATE_THRESHOLD.value},
            )
            return StopReason.DUPLICATE_THRESHOLD

        return None


def collect_trademarks(
    settings: Settings,
    *,
    metrics: RunMetrics | None = None,
    http_client: httpx.Client | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunResult:
    """Run a full pagination over the register with the given settings.

    Args:
        settings: Pipeline settings (must carry an API key)
        metrics: Metrics updated during the run
        http_client: Pre-built httpx client (mainly for tests)
        sleep: Sleep used between retries

    Returns:
        RunResult of the run

    Raises:
        ConfigurationError: If no API key is configured
        PipelineError: Any fatal failure during the run
    """
    metrics = metrics if metrics is not None else RunMetrics()

    def on_retry(attempt: int, outcome: RetryOutcome) -> None:
        metrics.record_retry(rate_limited=outcome.kind is OutcomeKind.RATE_LIMITED)

    with TrademarkApiClient(
        api_key=settings.api_key,
        base_url=settings.trademark_api_url,
        request_timeout=settings.request_timeout,
        pool_timeout=settings.pool_timeout,
        client=http_client,
    ) as client:
        driver = PaginationDriver(
            fetcher=client,
            retrier=BackoffRetrier(sleep=sleep, on_retry=on_retry),
            tracker=DuplicateTracker(verbose=settings.verbose),
            max_page_number=settings.max_page_number,
            max_duplicates=settings.max_duplicates,
            metrics=metrics,
        )
        with log_context(run_id=uuid.uuid4().hex[:8]):
            result = driver.run()

    metrics.complete(stop_reason=result.stop_reason.value)
    return result
