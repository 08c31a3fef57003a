"""Classification of registry responses into retry outcomes.

This is the central place for deciding what a response means:

    200 -> SUCCESS (body parsed as a Page; unparsable body is FATAL)
    429 -> RATE_LIMITED (Retry-After seconds; missing/unparsable is FATAL)
    401 -> UNAUTHORIZED
    any other status -> RETRYABLE
    transport failure -> RETRYABLE
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..config.constants import RETRY_AFTER_HEADER
from ..core.types import OutcomeKind, Page, RetryOutcome

# Keep diagnostics readable when the server returns an HTML error page
_MAX_BODY_IN_MESSAGE = 500


def is_retryable(kind: OutcomeKind) -> bool:
    """Check if an outcome kind should be retried."""
    return kind in (OutcomeKind.RATE_LIMITED, OutcomeKind.RETRYABLE)


def parse_retry_after(headers: Mapping[str, str]) -> int | None:
    """Read Retry-After (whole seconds) and convert it to milliseconds.

    Returns None when the header is missing or not plain ASCII digits
    (HTTP delta-seconds), so signs, underscores and non-ASCII digits are
    rejected along with dates.
    """
    raw = _get_header(headers, RETRY_AFTER_HEADER)
    if raw is None:
        return None
    value = raw.strip()
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value) * 1000


def parse_page(body: bytes | str) -> Page:
    """Parse a 200 response body into a Page.

    Raises:
        ValueError: If the body is not JSON or does not describe a page
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"response body is not JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("response body is not a JSON object")
    try:
        return Page.model_validate(payload)
    except ValidationError as e:
        raise ValueError(f"response body is not a page: {e}") from e


def classify_response(
    status_code: int,
    headers: Mapping[str, str],
    body: bytes | str,
) -> RetryOutcome:
    """Map an HTTP response to a RetryOutcome."""
    if status_code == 200:
        try:
            return RetryOutcome.success(parse_page(body))
        except ValueError as e:
            return RetryOutcome.fatal(f"Malformed response: {e}")

    if status_code == 429:
        retry_after_ms = parse_retry_after(headers)
        if retry_after_ms is None:
            raw = _get_header(headers, RETRY_AFTER_HEADER)
            return RetryOutcome.fatal(f"Rate limited without usable Retry-After header: {raw!r}")
        return RetryOutcome.rate_limited(retry_after_ms)

    if status_code == 401:
        return RetryOutcome.unauthorized(f"Unauthorized {_describe_body(body)}")

    return RetryOutcome.retryable(f"Error from api (HTTP {status_code}): {_describe_body(body)}")


def classify_transport_error(error: Exception) -> RetryOutcome:
    """Map a transport failure (reset, timeout, refused) to a RETRYABLE outcome."""
    return RetryOutcome.retryable(f"{type(error).__name__}: {error}", error=error)


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    # httpx.Headers is case-insensitive; plain dicts in tests may not be
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def _describe_body(body: bytes | str) -> str:
    """Render a response body for diagnostics, preferring its JSON form."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        decoded: Any = json.loads(text)
    except json.JSONDecodeError:
        decoded = None
    if isinstance(decoded, str):
        text = decoded
    elif decoded is not None:
        text = json.dumps(decoded, ensure_ascii=False)
    if len(text) > _MAX_BODY_IN_MESSAGE:
        return text[:_MAX_BODY_IN_MESSAGE] + "..."
    return text
