"""Test module for date-aware decoding."""
from datetime import datetime, timezone
from typing import List, Optional

import pytest
from pydantic import BaseModel, ValidationError

from netlayer.core.decoding import (
    CustomDate,
    CustomDateJSONDecoder,
    date_from_string,
    date_to_string,
    with_strict_dates
)


class Event(BaseModel):
    name: str
    happened_at: CustomDate
    ends_at: Optional[CustomDate] = None


@pytest.fixture
def decoder():
    return CustomDateJSONDecoder()


def test_date_from_string():
    """Test parsing the wire date pattern"""
    parsed = date_from_string("2023-06-08T16:41:51Z")
    assert parsed == datetime(2023, 6, 8, 16, 41, 51, tzinfo=timezone.utc)


def test_date_from_string_with_fraction():
    """Test parsing dates with fractional seconds"""
    parsed = date_from_string("2023-06-08T16:41:51.250Z")
    assert parsed == datetime(2023, 6, 8, 16, 41, 51, 250000, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [
    "2023-06-08",
    "08/06/2023 16:41:51",
    "2023-06-08T16:41:51+02:00",
    "",
])
def test_date_from_string_rejects_other_patterns(value):
    """Test that strings outside the pattern are rejected"""
    with pytest.raises(ValueError):
        date_from_string(value)


def test_date_to_string_normalizes_to_utc():
    """Test formatting back to the wire pattern"""
    value = datetime(2023, 6, 8, 16, 41, 51, tzinfo=timezone.utc)
    assert date_to_string(value) == "2023-06-08T16:41:51Z"


def test_decode_model_with_custom_date(decoder):
    """Test decoding a model with a custom date field"""
    event = decoder.decode(Event, b'{"name": "launch", "happened_at": "2023-06-08T16:41:51Z"}')

    assert event.name == "launch"
    assert event.happened_at == datetime(2023, 6, 8, 16, 41, 51, tzinfo=timezone.utc)
    assert event.ends_at is None


def test_decode_list(decoder):
    """Test decoding a list target type"""
    events = decoder.decode(
        List[Event],
        b'[{"name": "a", "happened_at": "2023-06-08T16:41:51Z"},'
        b' {"name": "b", "happened_at": "2024-01-01T00:00:00Z"}]'
    )
    assert [e.name for e in events] == ["a", "b"]


def test_decode_malformed_date_fails(decoder):
    """Test that a malformed date string fails instead of defaulting"""
    with pytest.raises(ValidationError):
        decoder.decode(Event, b'{"name": "launch", "happened_at": "June 8th"}')


def test_decode_numeric_date_fails(decoder):
    """Test that timestamps are not accepted for custom date fields"""
    with pytest.raises(ValidationError):
        decoder.decode(Event, b'{"name": "launch", "happened_at": 1686242511}')


def test_decode_invalid_json_fails(decoder):
    """Test that bodies which are not JSON fail to decode"""
    with pytest.raises(ValidationError):
        decoder.decode(Event, b"<html>oops</html>")


def test_custom_date_serializes_to_wire_pattern():
    """Test that JSON dumps use the same pattern"""
    event = Event(name="launch", happened_at=datetime(2023, 6, 8, 16, 41, 51, tzinfo=timezone.utc))
    assert '"happened_at":"2023-06-08T16:41:51Z"' in event.model_dump_json()


class Audit(BaseModel):
    actor: str
    recorded_at: datetime
    reviewed_at: Optional[datetime] = None


class AuditLog(BaseModel):
    entries: List[Audit]
    generated_at: Optional[Event] = None


@pytest.mark.parametrize("value", ["2023-06-08", "2023-06-08T16:41:51+02:00", "1686242511"])
def test_decode_plain_datetime_field_is_strict(decoder, value):
    """Test that plain datetime fields only accept the wire pattern"""
    with pytest.raises(ValidationError):
        decoder.decode(Audit, f'{{"actor": "ops", "recorded_at": "{value}"}}'.encode())


def test_decode_plain_datetime_keeps_caller_class(decoder):
    """Test that strict decoding hands back the requested model class"""
    audit = decoder.decode(Audit, b'{"actor": "ops", "recorded_at": "2023-06-08T16:41:51Z"}')

    assert type(audit) is Audit
    assert audit.recorded_at == datetime(2023, 6, 8, 16, 41, 51, tzinfo=timezone.utc)
    assert audit == Audit(actor="ops", recorded_at=datetime(2023, 6, 8, 16, 41, 51, tzinfo=timezone.utc))


def test_decode_optional_datetime_in_nested_list_is_strict(decoder):
    """Test that the strict pattern reaches optional dates inside nested models"""
    body = (
        b'{"entries": [{"actor": "a", "recorded_at": "2023-06-08T16:41:51Z",'
        b' "reviewed_at": "2023-06-09"}]}'
    )
    with pytest.raises(ValidationError):
        decoder.decode(AuditLog, body)


def test_decode_bare_datetime_list(decoder):
    """Test strict parsing for a list of plain datetimes"""
    with pytest.raises(ValidationError):
        decoder.decode(List[datetime], b'["2023-06-08T16:41:51Z", "2023-06-08"]')

    assert decoder.decode(List[datetime], b'["2023-06-08T16:41:51Z"]') == [
        datetime(2023, 6, 8, 16, 41, 51, tzinfo=timezone.utc)
    ]


def test_with_strict_dates_leaves_date_free_types_alone():
    """Test that types without plain datetimes are not rewritten"""
    assert with_strict_dates(Event) is Event
    assert with_strict_dates(List[int]) == List[int]
    assert with_strict_dates(Optional[CustomDate]) == Optional[CustomDate]
    assert issubclass(with_strict_dates(Audit), Audit)
