"""Shared types for the trademark pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# A registry entry is an opaque JSON object; equality is structural.
Record = dict[str, Any]


class Page(BaseModel):
    """One batch of records plus pagination metadata, as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    total_hits_count: int = Field(alias="totalHitsCount", ge=0)
    page_number: int = Field(alias="pageNumber", ge=0)
    page_size: int = Field(alias="pageSize", gt=0)
    results: list[Record] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def null_results_as_empty(cls, value: Any) -> Any:
        """A null result list means the page is empty."""
        return [] if value is None else value

    @model_validator(mode="after")
    def check_results_fit_page(self) -> "Page":
        """Reject pages carrying more results than their declared size."""
        if len(self.results) > self.page_size:
            raise ValueError(
                f"page {self.page_number} has {len(self.results)} results "
                f"but pageSize is {self.page_size}"
            )
        return self

    @property
    def is_last(self) -> bool:
        """No further page can follow: empty or short page."""
        return not self.results or len(self.results) < self.page_size

    @property
    def next_page_number(self) -> int:
        return self.page_number + 1


@dataclass(frozen=True)
class SeenEntry:
    """A record as last seen, and the page it was seen on."""

    record: Record
    page_number: int


class OutcomeKind(str, Enum):
    """Classification of a single page request."""

    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"  # Wait twice Retry-After and retry
    UNAUTHORIZED = "unauthorized"  # Bad key - don't retry
    RETRYABLE = "retryable"  # Network or server error - backoff and retry
    FATAL = "fatal"  # Malformed response - don't retry


@dataclass(frozen=True)
class RetryOutcome:
    """Tagged result of one page request.

    Only the field matching `kind` is meaningful: `page` for SUCCESS,
    `retry_after_ms` for RATE_LIMITED, `message` for the failure kinds.
    `error` keeps the transport exception behind a RETRYABLE outcome.
    """

    kind: OutcomeKind
    page: Page | None = None
    retry_after_ms: int = 0
    message: str = ""
    error: Exception | None = None

    @classmethod
    def success(cls, page: Page) -> RetryOutcome:
        return cls(OutcomeKind.SUCCESS, page=page)

    @classmethod
    def rate_limited(cls, retry_after_ms: int) -> RetryOutcome:
        if retry_after_ms < 0:
            raise ValueError("retry_after_ms must be >= 0")
        return cls(
            OutcomeKind.RATE_LIMITED,
            retry_after_ms=retry_after_ms,
            message=f"Rate limited, Retry-After {retry_after_ms}ms",
        )

    @classmethod
    def unauthorized(cls, message: str) -> RetryOutcome:
        return cls(OutcomeKind.UNAUTHORIZED, message=message)

    @classmethod
    def retryable(cls, message: str, error: Exception | None = None) -> RetryOutcome:
        return cls(OutcomeKind.RETRYABLE, message=message, error=error)

    @classmethod
    def fatal(cls, message: str) -> RetryOutcome:
        return cls(OutcomeKind.FATAL, message=message)

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


class StopReason(str, Enum):
    """Why the pagination loop stopped."""

    END_OF_DATA = "end_of_data"
    PAGE_CAP = "page_cap"
    DUPLICATE_THRESHOLD = "duplicate_threshold"


@dataclass
class PaginationState:
    """Mutable loop state, owned by the pagination driver."""

    current_page_number: int = 0
    duplicate_count: int = 0
    pages_processed: int = 0


@dataclass
class RunResult:
    """Outcome of a complete pagination run."""

    stop_reason: StopReason
    total_hits: int
    state: PaginationState = field(default_factory=PaginationState)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "stop_reason": self.stop_reason.value,
            "total_hits": self.total_hits,
            "last_page_number": self.state.current_page_number,
            "pages_processed": self.state.pages_processed,
            "duplicate_count": self.state.duplicate_count,
        }
