"""Tests for trademark_pipeline/processors/identifier.py."""

import copy

import pytest

from trademark_pipeline.core.errors import MalformedRecordError
from trademark_pipeline.processors.identifier import build_identifier, extract_identifier

from .fixtures.registry_responses import (
    PENDING_RECORD,
    RECORD_WITHOUT_TRADEMARK,
    TRADEMARK_RECORD,
    make_record,
)


class TestBuildIdentifier:
    """Tests for build_identifier()."""

    def test_application_only(self):
        """No registration number gives the application number."""
        assert build_identifier("123") == "123"

    def test_with_registration(self):
        """Registration number is appended after a slash."""
        assert build_identifier("123", "456") == "123/456"

    def test_empty_registration_ignored(self):
        """Empty registration number counts as absent."""
        assert build_identifier("123", "") == "123"


class TestExtractIdentifier:
    """Tests for extract_identifier()."""

    def test_registered_trademark(self):
        """Registered record yields application/registration."""
        assert extract_identifier(TRADEMARK_RECORD) == "201912345/312345"

    def test_pending_application(self):
        """Pending record yields the application number."""
        assert extract_identifier(PENDING_RECORD) == "202400017"

    def test_numeric_registration_number(self):
        """Numeric registration numbers are rendered as text."""
        record = make_record("100")
        record["trademarkApplication"]["trademarkBag"]["trademark"][0][
            "trademarkTypeChoice1"
        ]["registrationNumber"] = 200
        assert extract_identifier(record) == "100/200"

    def test_null_registration_number(self):
        """Null registration number counts as absent."""
        record = make_record("100")
        record["trademarkApplication"]["trademarkBag"]["trademark"][0][
            "trademarkTypeChoice1"
        ]["registrationNumber"] = None
        assert extract_identifier(record) == "100"

    def test_empty_trademark_list(self):
        """Record without trademarks is malformed."""
        with pytest.raises(MalformedRecordError) as exc_info:
            extract_identifier(RECORD_WITHOUT_TRADEMARK)
        assert exc_info.value.field == "trademark"

    def test_missing_application(self):
        """Record without trademarkApplication is malformed."""
        with pytest.raises(MalformedRecordError) as exc_info:
            extract_identifier({"somethingElse": {}})
        assert exc_info.value.field == "trademarkApplication"

    def test_missing_application_number_text(self):
        """Application number entry without text is malformed."""
        record = copy.deepcopy(PENDING_RECORD)
        record["trademarkApplication"]["trademarkBag"]["trademark"][0]["trademarkTypeChoice1"][
            "applicationNumber"
        ] = [{}]
        with pytest.raises(MalformedRecordError) as exc_info:
            extract_identifier(record)
        assert exc_info.value.field == "applicationNumberText"

    def test_empty_application_number_list(self):
        """Empty applicationNumber list is malformed."""
        record = copy.deepcopy(PENDING_RECORD)
        record["trademarkApplication"]["trademarkBag"]["trademark"][0]["trademarkTypeChoice1"][
            "applicationNumber"
        ] = []
        with pytest.raises(MalformedRecordError):
            extract_identifier(record)

    def test_structured_registration_number_rejected(self):
        """A registration number that is an object is malformed."""
        record = make_record("100")
        record["trademarkApplication"]["trademarkBag"]["trademark"][0][
            "trademarkTypeChoice1"
        ]["registrationNumber"] = {"value": "1"}
        with pytest.raises(MalformedRecordError):
            extract_identifier(record)
