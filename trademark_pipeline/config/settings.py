"""Application settings using Pydantic. No side effects at import time."""

from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_API_URL,
    MAX_DUPLICATES,
    MAX_PAGE_NUMBER,
    POOL_TIMEOUT,
    REQUEST_TIMEOUT,
)


def mask_secret(value: str | None, visible_chars: int = 4) -> str:
    """Mask a secret value for safe logging."""
    if not value:
        return "(not set)"
    if len(value) <= visible_chars * 2:
        return "*" * len(value)
    return f"{value[:visible_chars]}...{value[-visible_chars:]}"


class Settings(BaseSettings):
    """Pipeline settings with validation.

    Settings are loaded from environment variables and .env file.
    No side effects at class definition time - .env is loaded only when
    Settings() is instantiated.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # === Registry API ===
    api_key: str | None = None
    trademark_api_url: str = DEFAULT_API_URL

    # === Output ===
    # Presence of VERBOSE enables verbose output, whatever its value
    verbose: bool = False
    log_json: bool = False

    # === Timeouts ===
    request_timeout: Annotated[float, Field(gt=0)] = REQUEST_TIMEOUT
    pool_timeout: Annotated[float, Field(gt=0)] = POOL_TIMEOUT

    # === Stop conditions ===
    max_page_number: Annotated[int, Field(ge=0)] = MAX_PAGE_NUMBER
    max_duplicates: Annotated[int, Field(ge=0)] = MAX_DUPLICATES

    @field_validator("verbose", mode="before")
    @classmethod
    def _present_means_true(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return value is not None

    @property
    def has_api_key(self) -> bool:
        """Check if the registry credential is configured."""
        return bool(self.api_key)

    def summary(self) -> dict[str, Any]:
        """Configuration summary with the credential masked."""
        return {
            "api_url": self.trademark_api_url,
            "api_key": mask_secret(self.api_key),
            "verbose": self.verbose,
            "request_timeout": self.request_timeout,
            "pool_timeout": self.pool_timeout,
            "max_page_number": self.max_page_number,
            "max_duplicates": self.max_duplicates,
        }


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings()
