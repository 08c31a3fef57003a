"""Registry response fixtures for trademark pipeline tests.

These fixtures mimic the structure of actual trademark register search
responses, trimmed to the fields the pipeline reads.
"""

from __future__ import annotations

import copy
from typing import Any

from trademark_pipeline.core.types import Page, RetryOutcome

# One record as returned in "results" (registered trademark)
TRADEMARK_RECORD = {
    "trademarkApplication": {
        "trademarkBag": {
            "trademark": [
                {
                    "trademarkTypeChoice1": {
                        "applicationNumber": [{"applicationNumberText": "201912345"}],
                        "registrationNumber": "312345",
                        "markCurrentStatusCode": "Registered",
                    },
                    "wordMarkSpecification": {"markVerbalElementText": "NORDLYS"},
                }
            ]
        }
    },
    "lastUpdated": "2024-03-01",
}

# Record of a pending application (no registration number yet)
PENDING_RECORD = {
    "trademarkApplication": {
        "trademarkBag": {
            "trademark": [
                {
                    "trademarkTypeChoice1": {
                        "applicationNumber": [{"applicationNumberText": "202400017"}],
                        "markCurrentStatusCode": "Filed",
                    }
                }
            ]
        }
    }
}

# Record without any trademark details
RECORD_WITHOUT_TRADEMARK = {"trademarkApplication": {"trademarkBag": {"trademark": []}}}

# Page 0 search response with unknown top-level fields
SEARCH_RESPONSE_FIRST_PAGE = {
    "totalHitsCount": 2,
    "pageNumber": 0,
    "pageSize": 50,
    "results": [TRADEMARK_RECORD, PENDING_RECORD],
    "searchId": "c0ffee",
}

UNAUTHORIZED_BODY = "Access denied due to invalid subscription key."

SERVER_ERROR_BODY = {"statusCode": 500, "message": "Internal server error"}


def make_record(
    application_number: str,
    registration_number: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a record with the given identifier parts and extra top-level fields."""
    details: dict[str, Any] = {
        "applicationNumber": [{"applicationNumberText": application_number}],
    }
    if registration_number is not None:
        details["registrationNumber"] = registration_number
    record: dict[str, Any] = {
        "trademarkApplication": {"trademarkBag": {"trademark": [{"trademarkTypeChoice1": details}]}}
    }
    record.update(copy.deepcopy(extra))
    return record


def make_page(
    page_number: int,
    records: list[dict[str, Any]],
    page_size: int = 50,
    total_hits: int = 100_000,
) -> Page:
    """Build a Page from records."""
    return Page(
        totalHitsCount=total_hits,
        pageNumber=page_number,
        pageSize=page_size,
        results=records,
    )


def full_page(page_number: int, page_size: int = 50, total_hits: int = 100_000) -> Page:
    """Build a full page of distinct records."""
    records = [make_record(f"{page_number:04d}{i:03d}") for i in range(page_size)]
    return make_page(page_number, records, page_size=page_size, total_hits=total_hits)


class ScriptedFetcher:
    """Fetcher returning scripted outcomes and recording requested pages.

    `pages` maps a page number to the page served for it; `outcomes` maps a
    page number to a list of outcomes served before that page (e.g. failures
    that precede a success). Pages not in `pages` are produced by `default`.
    """

    def __init__(
        self,
        pages: dict[int, Page] | None = None,
        outcomes: dict[int, list[RetryOutcome]] | None = None,
        default=None,
    ) -> None:
        self.pages = pages or {}
        self.outcomes = {k: list(v) for k, v in (outcomes or {}).items()}
        self.default = default
        self.requested: list[int] = []

    def fetch(self, page_number: int) -> RetryOutcome:
        self.requested.append(page_number)
        queued = self.outcomes.get(page_number)
        if queued:
            return queued.pop(0)
        if page_number in self.pages:
            return RetryOutcome.success(self.pages[page_number])
        if self.default is not None:
            return RetryOutcome.success(self.default(page_number))
        raise AssertionError(f"Unexpected request for page {page_number}")


class RecordingSleep:
    """Sleep replacement that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.delays)
