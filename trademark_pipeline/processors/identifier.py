"""Record identifiers for trademark registry entries.

A record is identified by its application number, plus its registration
number once the trademark is registered:

    "<applicationNumber>" or "<applicationNumber>/<registrationNumber>"

Both are read from the first trademark of the record:

    trademarkApplication.trademarkBag.trademark[0].trademarkTypeChoice1
        .applicationNumber[0].applicationNumberText   (required)
        .registrationNumber                           (optional)
"""

from __future__ import annotations

from typing import Any

from ..core.errors import MalformedRecordError
from ..core.types import Record

_TRADEMARK_PATH = ("trademarkApplication", "trademarkBag", "trademark")


def build_identifier(application_number: str, registration_number: str | None = None) -> str:
    """Compose an identifier from its parts."""
    if registration_number:
        return f"{application_number}/{registration_number}"
    return application_number


def extract_identifier(record: Record) -> str:
    """Compute the identifier of a record.

    Raises:
        MalformedRecordError: If the application number cannot be found
    """
    details = _trademark_details(record)

    numbers = details.get("applicationNumber")
    if not isinstance(numbers, list) or not numbers or not isinstance(numbers[0], dict):
        raise MalformedRecordError(
            "Record has no applicationNumber", field="applicationNumber"
        )
    application_number = numbers[0].get("applicationNumberText")
    if not isinstance(application_number, str) or not application_number:
        raise MalformedRecordError(
            "Record has no applicationNumberText", field="applicationNumberText"
        )

    return build_identifier(
        application_number, _registration_number(details.get("registrationNumber"))
    )


def _trademark_details(record: Record) -> dict[str, Any]:
    """Walk down to trademarkTypeChoice1 of the first trademark."""
    node: Any = record
    for key in _TRADEMARK_PATH:
        node = node.get(key) if isinstance(node, dict) else None
        if node is None:
            raise MalformedRecordError(f"Record has no {key}", field=key)

    # Records describe a single trademark
    if not isinstance(node, list) or not node:
        raise MalformedRecordError("Record has an empty trademark list", field="trademark")
    details = node[0].get("trademarkTypeChoice1") if isinstance(node[0], dict) else None
    if not isinstance(details, dict):
        raise MalformedRecordError(
            "Record has no trademarkTypeChoice1", field="trademarkTypeChoice1"
        )
    return details


def _registration_number(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise MalformedRecordError(
            f"Unexpected registrationNumber: {value!r}", field="registrationNumber"
        )
    return str(value)
