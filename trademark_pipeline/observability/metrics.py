"""Metrics collection for a pagination run.

Tracks pages, records, duplicates, retries and the stop reason.

Usage:
    from trademark_pipeline.observability import RunMetrics

    metrics = RunMetrics()
    metrics.record_page(record_count=50, duplicates=2, mismatches=1)
    metrics.record_retry(rate_limited=True)
    metrics.complete("end_of_data")

    print(metrics.to_summary())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class RunMetrics:
    """Metrics for a single pagination run."""

    started_at: datetime = field(default_factory=datetime.now)
    ended_at: datetime | None = None

    total_hits: int = 0
    pages: int = 0
    records: int = 0
    duplicates: int = 0
    content_mismatches: int = 0

    retries: int = 0
    rate_limit_hits: int = 0

    stop_reason: str | None = None
    error_type: str | None = None

    @property
    def duration_seconds(self) -> float:
        """Total duration in seconds."""
        end = self.ended_at or datetime.now()
        return (end - self.started_at).total_seconds()

    @property
    def unique_records(self) -> int:
        return self.records - self.duplicates

    @property
    def duplicate_rate(self) -> float:
        """Duplicates as percentage of records seen (0-100)."""
        if self.records == 0:
            return 0.0
        return self.duplicates / self.records * 100

    def record_page(self, record_count: int, duplicates: int = 0, mismatches: int = 0) -> None:
        """Record one processed page."""
        self.pages += 1
        self.records += record_count
        self.duplicates += duplicates
        self.content_mismatches += mismatches

    def record_retry(self, rate_limited: bool = False) -> None:
        """Record a retry, flagging rate-limit retries separately."""
        self.retries += 1
        if rate_limited:
            self.rate_limit_hits += 1

    def complete(self, stop_reason: str | None = None, error_type: str | None = None) -> None:
        """Mark the run as finished, either stopped or failed."""
        self.ended_at = datetime.now()
        self.stop_reason = stop_reason
        self.error_type = error_type

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "duration_seconds": round(self.duration_seconds, 2),
            "total_hits": self.total_hits,
            "pages": self.pages,
            "records": self.records,
            "unique_records": self.unique_records,
            "duplicates": self.duplicates,
            "duplicate_rate": round(self.duplicate_rate, 2),
            "content_mismatches": self.content_mismatches,
            "retries": self.retries,
            "rate_limit_hits": self.rate_limit_hits,
            "stop_reason": self.stop_reason,
            "error_type": self.error_type,
        }

    def to_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Trademark Run Summary",
            "=" * 40,
            f"Duration: {self.duration_seconds:.1f}s",
            f"Total hits: {self.total_hits}",
            f"Pages: {self.pages}",
            f"Records: {self.records} ({self.unique_records} unique)",
            f"Duplicates: {self.duplicates} ({self.duplicate_rate:.1f}%)",
        ]

        if self.content_mismatches > 0:
            lines.append(f"Content mismatches: {self.content_mismatches}")

        if self.retries > 0:
            lines.append(f"Retries: {self.retries} (rate limited: {self.rate_limit_hits})")

        if self.error_type:
            lines.append(f"Failed: {self.error_type}")
        else:
            lines.append(f"Stopped: {self.stop_reason}")

        return "\n".join(lines)
