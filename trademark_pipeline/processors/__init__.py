"""Record processing: identifiers and duplicate detection."""

from .duplicates import DuplicateObservation, DuplicateTracker
from .identifier import build_identifier, extract_identifier

__all__ = [
    "DuplicateObservation",
    "DuplicateTracker",
    "build_identifier",
    "extract_identifier",
]
