"""Collectors that walk the trademark register."""

from .pagination import PageFetcher, PaginationDriver, collect_trademarks

__all__ = [
    "PageFetcher",
    "PaginationDriver",
    "collect_trademarks",
]
