"""Fixtures for trademark pipeline tests."""
