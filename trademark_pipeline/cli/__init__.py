"""Command line interface for the trademark pipeline."""
