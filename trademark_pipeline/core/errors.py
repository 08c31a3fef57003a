"""Error hierarchy for the trademark pipeline.

All pipeline errors inherit from PipelineError.
Use `is_retryable` property to determine if an error can be retried.
Retryable errors never escape BackoffRetrier on their own; they surface
only as the cause of RetriesExhaustedError.
"""

from __future__ import annotations

from typing import Any


class PipelineError(Exception):
    """Base error for all pipeline errors.

    Attributes:
        message: Error description
        page_number: Page being fetched or processed (if applicable)
    """

    def __init__(
        self,
        message: str,
        *,
        page_number: int | None = None,
    ) -> None:
        self.page_number = page_number
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Whether this error can be retried."""
        return False

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "page_number": self.page_number,
            "is_retryable": self.is_retryable,
        }


class ConfigurationError(PipelineError):
    """Required configuration (the API credential) is missing."""

    def __init__(self, message: str = "Missing configuration", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class NetworkError(PipelineError):
    """Transport-level failure: connection reset, timeout, non-success status.

    This is retryable - the registry might be temporarily unavailable.
    """

    def __init__(
        self,
        message: str = "Network error",
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code

    @property
    def is_retryable(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["status_code"] = self.status_code
        return d


class RateLimitError(PipelineError):
    """Rate limit exceeded (HTTP 429).

    This is retryable after waiting for twice `retry_after_ms`.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after_ms: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.retry_after_ms = retry_after_ms

    @property
    def is_retryable(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["retry_after_ms"] = self.retry_after_ms
        return d


class UnauthorizedError(PipelineError):
    """The registry rejected the subscription key (HTTP 401).

    This is NOT retryable - the same key will be rejected again.
    """

    def __init__(self, message: str = "Unauthorized", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class MalformedResponseError(PipelineError):
    """A response could not be interpreted.

    Raised for an unparsable 200 body or a 429 without a usable
    Retry-After header. This is NOT retryable.
    """

    def __init__(self, message: str = "Malformed response", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class MalformedRecordError(PipelineError):
    """A record lacks the fields its identifier is built from.

    This is NOT retryable - it aborts processing of the record's page.
    """

    def __init__(
        self,
        message: str = "Malformed record",
        *,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["field"] = self.field
        return d


class RetriesExhaustedError(PipelineError):
    """All retry attempts for a page failed with retryable outcomes.

    The last retryable cause is available as `__cause__` when the outcome
    carried an exception, and its message as `last_reason`.
    """

    def __init__(
        self,
        message: str = "Retries exhausted",
        *,
        attempts: int = 0,
        last_reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.attempts = attempts
        self.last_reason = last_reason

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["attempts"] = self.attempts
        d["last_reason"] = self.last_reason
        return d
