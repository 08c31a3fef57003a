"""Configuration module for the trademark pipeline."""

from .constants import (
    # Registry API
    DEFAULT_API_URL,
    SEARCH_PATH,
    SUBSCRIPTION_KEY_HEADER,
    # Search request
    APPLICATION_DATE_FROM,
    PAGE_SIZE,
    # Timeouts
    POOL_TIMEOUT,
    REQUEST_TIMEOUT,
    # Retry
    MAX_RETRIES,
    # Stop conditions
    MAX_DUPLICATES,
    MAX_PAGE_NUMBER,
)
from .settings import Settings, get_settings, mask_secret

__all__ = [
    "Settings",
    "get_settings",
    "mask_secret",
    "DEFAULT_API_URL",
    "SEARCH_PATH",
    "SUBSCRIPTION_KEY_HEADER",
    "APPLICATION_DATE_FROM",
    "PAGE_SIZE",
    "POOL_TIMEOUT",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "MAX_DUPLICATES",
    "MAX_PAGE_NUMBER",
]
