"""Duplicate detection across registry pages.

The tracker remembers every identifier seen during a run together with the
last version of its record and the page it came from. A record whose
identifier was already seen is a duplicate; its content is compared with
the stored version so overlapping pages can be told apart from records
that changed between requests.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.types import Page, Record, SeenEntry
from ..observability.logger import get_logger, log_context
from .identifier import extract_identifier

logger = get_logger(__name__)


@dataclass(frozen=True)
class DuplicateObservation:
    """One duplicate found while processing a page."""

    identifier: str
    previous_page: int
    current_page: int
    content_identical: bool


@dataclass
class DuplicateTracker:
    """Track identifiers seen during a run and count duplicates.

    Owned by the pagination driver; one instance per run.
    """

    identify: Callable[[Record], str] = extract_identifier
    verbose: bool = False

    _seen: dict[str, SeenEntry] = field(default_factory=dict, init=False, repr=False)
    _duplicate_count: int = field(default=0, init=False)
    _mismatch_count: int = field(default=0, init=False)
    _last_duplicates: list[DuplicateObservation] = field(
        default_factory=list, init=False, repr=False
    )

    @property
    def duplicate_count(self) -> int:
        """Cumulative number of duplicates observed."""
        return self._duplicate_count

    @property
    def mismatch_count(self) -> int:
        """Duplicates whose content differed from the stored version."""
        return self._mismatch_count

    @property
    def seen_count(self) -> int:
        """Number of distinct identifiers seen."""
        return len(self._seen)

    @property
    def last_duplicates(self) -> list[DuplicateObservation]:
        """Duplicates found by the most recent process() call."""
        return list(self._last_duplicates)

    def get(self, identifier: str) -> SeenEntry | None:
        """Return the stored entry for an identifier, if seen."""
        return self._seen.get(identifier)

    def process(self, page: Page) -> int:
        """Register every record of a page, in order.

        Args:
            page: Page to process

        Returns:
            The cumulative duplicate count

        Raises:
            MalformedRecordError: If a record's identifier cannot be extracted
        """
        self._last_duplicates = []
        logger.info(f"Page {page.page_number} documents (applicationId/registrationId):")

        for record in page.results:
            identifier = self.identify(record)
            logger.info(f"\t{identifier}")

            previous = self._seen.get(identifier)
            if previous is not None:
                self._report_duplicate(identifier, previous, record, page.page_number)

            self._seen[identifier] = SeenEntry(record=record, page_number=page.page_number)

        return self._duplicate_count

    def _report_duplicate(
        self,
        identifier: str,
        previous: SeenEntry,
        record: Record,
        page_number: int,
    ) -> None:
        identical = _canonical(previous.record) == _canonical(record)
        self._duplicate_count += 1
        if not identical:
            self._mismatch_count += 1
        self._last_duplicates.append(
            DuplicateObservation(
                identifier=identifier,
                previous_page=previous.page_number,
                current_page=page_number,
                content_identical=identical,
            )
        )

        with log_context(record_id=identifier):
            logger.warning(
                f"\t\tDocument already processed: {identifier} on page {previous.page_number}",
                extra={"duplicate_count": self._duplicate_count},
            )
            if identical:
                logger.info("\t\tDocument content identical: True")
            else:
                logger.warning("\t\tDocument content identical: False")

            if self.verbose:
                logger.warning(f"Current: {_pretty(record)}")
                logger.warning(f"Previous: {_pretty(previous.record)}")

    def __contains__(self, identifier: str) -> bool:
        """Support 'in' operator."""
        return identifier in self._seen

    def __len__(self) -> int:
        """Support len()."""
        return self.seen_count


def _canonical(record: Record) -> str:
    # JSON text keeps true, 1 and 1.0 apart where dict equality does not
    return json.dumps(record, ensure_ascii=False, sort_keys=True)


def _pretty(record: Record) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False, sort_keys=True)
