"""Trademark register pipeline: paginated fetch with duplicate detection."""

__version__ = "0.1.0"
