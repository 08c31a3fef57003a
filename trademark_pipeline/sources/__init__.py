"""Data sources for the trademark pipeline."""

from .trademark_api import TrademarkApiClient, build_search_body

__all__ = [
    "TrademarkApiClient",
    "build_search_body",
]
