"""Retry and backoff infrastructure for registry requests."""

from .backoff import REGISTRY_BACKOFF, BackoffPolicy, ExponentialBackoff, NoBackoff
from .classifier import (
    classify_response,
    classify_transport_error,
    is_retryable,
    parse_page,
    parse_retry_after,
)
from .retrier import BackoffRetrier

__all__ = [
    # Backoff policies
    "BackoffPolicy",
    "ExponentialBackoff",
    "NoBackoff",
    "REGISTRY_BACKOFF",
    # Classification
    "classify_response",
    "classify_transport_error",
    "is_retryable",
    "parse_page",
    "parse_retry_after",
    # Retrier
    "BackoffRetrier",
]
