"""
Trademark Registry API Client

Fetches pages of the Norwegian trademark register (Patentstyret open data)
through its JSON search endpoint.

Usage:
    from trademark_pipeline.sources import TrademarkApiClient

    with TrademarkApiClient(api_key="...") as client:
        outcome = client.fetch(0)
        if outcome.is_success:
            print(outcome.page.total_hits_count)

Every request searches from a fixed application date lower bound, so page
N of the search is page N of the whole register. Responses are classified
into RetryOutcome values; the client itself never retries.
"""

from __future__ import annotations

import json
from types import TracebackType
from typing import Any

import httpx

from ..config.constants import (
    APPLICATION_DATE_FROM,
    DEFAULT_API_URL,
    PAGE_SIZE,
    POOL_TIMEOUT,
    REQUEST_TIMEOUT,
    SEARCH_PATH,
    SUBSCRIPTION_KEY_HEADER,
)
from ..core.errors import ConfigurationError
from ..core.types import RetryOutcome
from ..observability.logger import get_logger
from ..rate_limit.classifier import classify_response, classify_transport_error

logger = get_logger(__name__)


def build_search_body(page_number: int, page_size: int = PAGE_SIZE) -> dict[str, Any]:
    """Build the search request body for one page."""
    if page_number < 0:
        raise ValueError(f"page_number must be >= 0, got {page_number}")
    return {
        "applicationDateFrom": APPLICATION_DATE_FROM,
        "pageSize": page_size,
        "pageNumber": page_number,
    }


def _log_request(request: httpx.Request) -> None:
    """Log the URL and body of every outgoing request."""
    logger.info(f"Request URL: {request.url}")
    if request.content:
        logger.info(f"Request Body: {request.content.decode('utf-8', errors='replace')}")


class TrademarkApiClient:
    """Client for the trademark register search API."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_API_URL,
        request_timeout: float = REQUEST_TIMEOUT,
        pool_timeout: float = POOL_TIMEOUT,
        page_size: int = PAGE_SIZE,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the registry client.

        Args:
            api_key: Subscription key sent with every request
            base_url: API base URL (search path is appended)
            request_timeout: Total response timeout in seconds
            pool_timeout: Timeout for acquiring a pooled connection
            page_size: Records requested per page
            client: Pre-built httpx client (mainly for tests)

        Raises:
            ConfigurationError: If api_key is missing or empty
        """
        if not api_key:
            raise ConfigurationError("API key is required to query the trademark register")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size

        if client is None:
            client = httpx.Client(
                timeout=httpx.Timeout(request_timeout, pool=pool_timeout),
                follow_redirects=False,
            )
        hooks = client.event_hooks
        client.event_hooks = {
            "request": [*hooks.get("request", []), _log_request],
            "response": list(hooks.get("response", [])),
        }
        self._client = client

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{SEARCH_PATH}"

    def _headers(self) -> dict[str, str]:
        """Build request headers with authentication."""
        return {
            "Content-Type": "application/json",
            "Cache-Control": "no-cache",
            SUBSCRIPTION_KEY_HEADER: self.api_key,
        }

    def fetch(self, page_number: int) -> RetryOutcome:
        """
        Request one page of the register.

        Args:
            page_number: Zero-based page number

        Returns:
            Classified outcome; transport failures become RETRYABLE
        """
        body = json.dumps(build_search_body(page_number, self.page_size))

        try:
            response = self._client.post(
                self.search_url,
                content=body,
                headers=self._headers(),
            )
        except httpx.TransportError as e:
            # Covers connect/read errors and both timeouts (pool and total)
            logger.warning(f"Request for page {page_number} failed: {type(e).__name__}: {e}")
            return classify_transport_error(e)

        return classify_response(response.status_code, response.headers, response.content)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> TrademarkApiClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
