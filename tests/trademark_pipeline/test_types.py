"""Tests for trademark_pipeline/core (types and errors)."""

import pytest
from pydantic import ValidationError

from trademark_pipeline.core.errors import (
    NetworkError,
    RateLimitError,
    RetriesExhaustedError,
    UnauthorizedError,
)
from trademark_pipeline.core.types import (
    OutcomeKind,
    Page,
    PaginationState,
    RetryOutcome,
    RunResult,
    StopReason,
)


class TestPage:
    """Tests for the Page model."""

    def test_parses_api_field_names(self):
        page = Page.model_validate(
            {"totalHitsCount": 120, "pageNumber": 2, "pageSize": 50, "results": [{}] * 20}
        )

        assert page.total_hits_count == 120
        assert page.page_number == 2
        assert page.next_page_number == 3
        assert page.is_last

    def test_full_page_is_not_last(self):
        page = Page(totalHitsCount=100, pageNumber=0, pageSize=2, results=[{}, {}])
        assert not page.is_last

    def test_empty_page_is_last(self):
        assert Page(totalHitsCount=0, pageNumber=0, pageSize=50).is_last

    def test_too_many_results_rejected(self):
        with pytest.raises(ValidationError):
            Page(totalHitsCount=3, pageNumber=0, pageSize=1, results=[{}, {}])

    def test_negative_page_number_rejected(self):
        with pytest.raises(ValidationError):
            Page(totalHitsCount=0, pageNumber=-1, pageSize=50)


class TestRetryOutcome:
    """Tests for RetryOutcome constructors."""

    def test_rate_limited(self):
        outcome = RetryOutcome.rate_limited(1500)

        assert outcome.kind is OutcomeKind.RATE_LIMITED
        assert outcome.retry_after_ms == 1500
        assert not outcome.is_success

    def test_negative_retry_after_rejected(self):
        with pytest.raises(ValueError):
            RetryOutcome.rate_limited(-1)


class TestRunResult:
    def test_to_dict(self):
        result = RunResult(
            stop_reason=StopReason.PAGE_CAP,
            total_hits=900_000,
            state=PaginationState(current_page_number=501, duplicate_count=4, pages_processed=502),
        )

        assert result.to_dict() == {
            "stop_reason": "page_cap",
            "total_hits": 900_000,
            "last_page_number": 501,
            "pages_processed": 502,
            "duplicate_count": 4,
        }


class TestErrors:
    """Tests for the error hierarchy."""

    def test_retryable_flags(self):
        assert RateLimitError(retry_after_ms=100).is_retryable
        assert NetworkError("reset").is_retryable
        assert not UnauthorizedError().is_retryable

    def test_to_dict(self):
        error = RetriesExhaustedError("gave up", attempts=6, last_reason="HTTP 500", page_number=3)
        data = error.to_dict()

        assert data["error_type"] == "RetriesExhaustedError"
        assert data["page_number"] == 3
        assert data["is_retryable"] is False
