"""Core infrastructure for the trademark pipeline."""

from .errors import (
    ConfigurationError,
    MalformedRecordError,
    MalformedResponseError,
    NetworkError,
    PipelineError,
    RateLimitError,
    RetriesExhaustedError,
    UnauthorizedError,
)
from .types import (
    OutcomeKind,
    Page,
    PaginationState,
    Record,
    RetryOutcome,
    RunResult,
    SeenEntry,
    StopReason,
)

__all__ = [
    # Errors
    "PipelineError",
    "ConfigurationError",
    "NetworkError",
    "RateLimitError",
    "UnauthorizedError",
    "MalformedResponseError",
    "MalformedRecordError",
    "RetriesExhaustedError",
    # Types
    "Record",
    "Page",
    "SeenEntry",
    "OutcomeKind",
    "RetryOutcome",
    "StopReason",
    "PaginationState",
    "RunResult",
]
