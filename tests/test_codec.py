"""Tests for the JSON decoder and ISO-8601 date strategy."""

import json
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from apiwire import (
    DecodingError,
    IsoDateTime,
    JsonDecoder,
    NetworkService,
    encode_json,
    format_iso8601,
    parse_iso8601,
)
from pydantic import BaseModel


class Event(BaseModel):
    id: int
    name: str
    created_at: IsoDateTime


class TestParseIso8601:
    """Tests for parse_iso8601."""

    def test_fractional_seconds(self):
        """Test a timestamp with milliseconds."""
        value = parse_iso8601("2024-12-01T14:45:30.123Z")
        assert value.second == 30
        assert value.microsecond == 123000
        assert value.tzinfo is not None
        assert value.utcoffset() == timedelta(0)

    def test_whole_seconds(self):
        """Test a timestamp without fraction."""
        value = parse_iso8601("2024-06-15T10:30:00Z")
        assert (value.hour, value.minute, value.second, value.microsecond) == (10, 30, 0, 0)

    def test_offset(self):
        """Test a numeric timezone offset."""
        value = parse_iso8601("2024-06-15T10:30:00+02:00")
        assert value.utcoffset() == timedelta(hours=2)

    @pytest.mark.parametrize("raw", ["not-a-date", "2024-06-15", "2024-06-15T10:30:00", ""])
    def test_invalid(self, raw):
        """Test that unparseable strings raise ValueError."""
        with pytest.raises(ValueError):
            parse_iso8601(raw)


class TestFormatIso8601:
    """Tests for format_iso8601."""

    def test_always_fractional(self):
        """Test that whole-second datetimes still get milliseconds."""
        value = datetime(2024, 1, 1, 12, 34, 56, tzinfo=timezone.utc)
        assert format_iso8601(value) == "2024-01-01T12:34:56.000Z"

    def test_converts_to_utc(self):
        """Test that offsets are normalized to Z."""
        value = datetime(2024, 1, 1, 14, 0, 0, 789000, tzinfo=timezone(timedelta(hours=2)))
        assert format_iso8601(value) == "2024-01-01T12:00:00.789Z"


class TestJsonDecoder:
    """Tests for JsonDecoder."""

    def test_decode_model_with_dates(self):
        """Test both date forms decode under the same strategy."""
        decoder = JsonDecoder()
        fractional = decoder.decode(b'{"id": 1, "name": "a", "created_at": "2024-12-01T14:45:30.123Z"}', Event)
        whole = decoder.decode(b'{"id": 2, "name": "b", "created_at": "2024-06-15T10:30:00Z"}', Event)

        assert fractional.created_at.microsecond == 123000
        assert whole.created_at.second == 0
        assert whole.created_at.microsecond == 0

    def test_invalid_date_is_decoding_error(self):
        """Test that a bad date surfaces as DecodingError."""
        with pytest.raises(DecodingError) as exc_info:
            JsonDecoder().decode(b'{"id": 1, "name": "a", "created_at": "not-a-date"}', Event)
        assert exc_info.value.cause is not None

    def test_decode_many(self):
        """Test decoding a JSON array."""
        events = JsonDecoder().decode_many(
            b'[{"id": 1, "name": "a", "created_at": "2024-06-15T10:30:00Z"},'
            b' {"id": 2, "name": "b", "created_at": "2024-06-15T10:30:00.5Z"}]',
            Event,
        )
        assert [e.id for e in events] == [1, 2]
        assert events[1].created_at.microsecond == 500000

    def test_decode_many_rejects_object(self):
        """Test that an object is not accepted as an array."""
        with pytest.raises(DecodingError):
            JsonDecoder().decode_many(b'{"id": 1}', Event)

    @pytest.mark.parametrize("data", [b"", b"{not json", b"null"])
    def test_malformed_body(self, data):
        """Test malformed or empty bodies."""
        with pytest.raises(DecodingError):
            JsonDecoder().decode(data, Event)

    def test_strict_mode(self):
        """Test that strict mode disables coercion."""
        payload = b'{"id": "1", "name": "a", "created_at": "2024-06-15T10:30:00Z"}'
        assert JsonDecoder().decode(payload, Event).id == 1
        with pytest.raises(DecodingError):
            JsonDecoder(strict=True).decode(payload, Event)

    def test_plain_types(self):
        """Test that non-model shapes decode too."""
        assert JsonDecoder().decode(b'{"a": 1}', dict) == {"a": 1}
        assert JsonDecoder().decode_many(b"[1, 2, 3]", int) == [1, 2, 3]


class TestEncodeJson:
    """Tests for encode_json."""

    def test_model_round_trip_uses_fractional_dates(self):
        """Test that models and datetimes are encoded in fractional form."""
        event = Event(id=1, name="a", created_at=datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc))
        payload = json.loads(encode_json({"event": event}))
        assert payload == {"event": {"id": 1, "name": "a", "created_at": "2024-06-15T10:30:00.000Z"}}

    def test_unserializable(self):
        """Test that unknown objects raise TypeError."""
        with pytest.raises(TypeError):
            encode_json({"x": object()})


class Stamp(BaseModel):
    at: IsoDateTime


class PlainStamp(BaseModel):
    at: datetime


class Schedule(BaseModel):
    name: str
    stamps: list[PlainStamp]


class Window(BaseModel):
    opens: Optional[IsoDateTime] = None
    closes: list[IsoDateTime] = []


class TestDateStrategyCoverage:
    """Tests that every decoded date goes through parse_iso8601."""

    @pytest.mark.parametrize("raw", [b'"2024-06-15"', b"1718444400", b'"2024-06-15T10:30:00"'])
    def test_rejects_lenient_forms(self, raw):
        """Test that date-only, epoch and zone-less values are decoding errors."""
        with pytest.raises(DecodingError):
            JsonDecoder().decode(b'{"at": ' + raw + b"}", Stamp)

    def test_plain_datetime_field_refused(self):
        """Test that a model with a plain datetime field cannot be decoded."""
        with pytest.raises(TypeError, match="PlainStamp.at"):
            JsonDecoder().decode(b'{"at": "2024-06-15"}', PlainStamp)

    def test_plain_datetime_refused_in_arrays(self):
        """Test that decode_many applies the same rule."""
        with pytest.raises(TypeError):
            JsonDecoder().decode_many(b'[{"at": "2024-06-15T10:30:00Z"}]', PlainStamp)

    def test_nested_plain_datetime_refused(self):
        """Test that plain datetimes inside nested models are found."""
        with pytest.raises(TypeError, match="PlainStamp.at"):
            JsonDecoder().decode(b'{"name": "x", "stamps": []}', Schedule)

    def test_bare_datetime_shape_refused(self):
        """Test that decoding straight into datetime is refused."""
        with pytest.raises(TypeError):
            JsonDecoder().decode(b'"2024-06-15T10:30:00Z"', datetime)

    def test_wrapped_iso_fields_accepted(self):
        """Test Optional and list wrappers around IsoDateTime."""
        window = JsonDecoder().decode(
            b'{"opens": null, "closes": ["2024-06-15T10:30:00Z", "2024-06-15T11:00:00.250Z"]}', Window
        )
        assert window.opens is None
        assert window.closes[1].microsecond == 250000

    def test_service_default_decoder(self):
        """Test that a default NetworkService decoder applies the rule."""
        with pytest.raises(TypeError):
            NetworkService().decoder.decode(b'{"at": "2024-06-15"}', PlainStamp)
