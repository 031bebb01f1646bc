from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from terrakit.codecs import (
    decode_base64_text,
    decode_optional_base64_text,
    encode_base64_text,
    encode_optional_base64_text,
    format_datetime,
    format_number,
    format_optional_datetime,
    format_optional_number,
    parse_datetime,
    parse_decimal,
    parse_f64,
    parse_i64,
    parse_optional_datetime,
    parse_optional_decimal,
    parse_optional_u64,
    parse_u64,
)
from terrakit.errors import SerializationError

UTC = timezone.utc


def test_parse_datetime_short_z():
    assert parse_datetime("2021-10-04T03:11:54Z") == datetime(2021, 10, 4, 3, 11, 54, tzinfo=UTC)


def test_parse_datetime_nanoseconds_z():
    value = parse_datetime("2021-10-04T03:11:54.123456789Z")
    assert value == datetime(2021, 10, 4, 3, 11, 54, 123456, tzinfo=UTC)


def test_parse_datetime_without_zone():
    assert parse_datetime("2021-10-04T03:11:54") == datetime(2021, 10, 4, 3, 11, 54, tzinfo=UTC)


def test_parse_datetime_offset_is_ignored():
    value = parse_datetime("2021-10-04T03:11:54.123+05:00")
    assert (value.hour, value.minute, value.second) == (3, 11, 54)
    assert value.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "text",
    ["", "not a date", "2021-10-04T03:11:54.123Z", "2021-13-04T03:11:54Z", "2021-10-04 03:11:54Z"],
)
def test_parse_datetime_errors(text):
    with pytest.raises(SerializationError):
        parse_datetime(text)


def test_parse_datetime_rejects_non_string():
    with pytest.raises(SerializationError):
        parse_datetime(12345)


@pytest.mark.parametrize("micro", [0, 500000, 123456, 1000])
def test_format_parse_round_trip(micro):
    dt = datetime(2022, 1, 2, 3, 4, 5, micro, tzinfo=UTC)
    assert parse_datetime(format_datetime(dt) + "Z" if micro == 0 else format_datetime(dt)) == dt


def test_format_datetime_trims_fraction():
    assert "." not in format_datetime(datetime(2022, 1, 2, 3, 4, 5, tzinfo=UTC))
    millis = format_datetime(datetime(2022, 1, 2, 3, 4, 5, 500000, tzinfo=UTC))
    assert len(millis.split(".")[1]) == 3
    micros = format_datetime(datetime(2022, 1, 2, 3, 4, 5, 123456, tzinfo=UTC))
    assert micros.endswith(".123456")


def test_format_datetime_converts_to_utc():
    local = datetime(2022, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert format_datetime(local) == format_datetime(datetime(2022, 1, 2, 3, 4, 5, tzinfo=UTC))


def test_optional_datetime():
    assert parse_optional_datetime(None) is None
    assert format_optional_datetime(None) is None
    dt = datetime(2022, 1, 2, 3, 4, 5, 250000, tzinfo=UTC)
    assert parse_optional_datetime(format_optional_datetime(dt)) == dt


@pytest.mark.parametrize("value", [0, 1, 2**64 - 1])
def test_parse_u64_round_trip(value):
    assert parse_u64(format_number(value)) == value


@pytest.mark.parametrize("text", ["", "-1", " 1", "1.0", str(2**64), "+", "abc"])
def test_parse_u64_errors(text):
    with pytest.raises(SerializationError):
        parse_u64(text)


def test_parse_u64_requires_string():
    with pytest.raises(SerializationError):
        parse_u64(5)


@pytest.mark.parametrize("value", [-(2**63), -1, 0, 2**63 - 1])
def test_parse_i64_round_trip(value):
    assert parse_i64(str(value)) == value


@pytest.mark.parametrize("text", [str(2**63), str(-(2**63) - 1), "1e3", ""])
def test_parse_i64_errors(text):
    with pytest.raises(SerializationError):
        parse_i64(text)


@pytest.mark.parametrize("text", ["0.05", "1", "1.", ".5", "2.5e3", "-0.75"])
def test_parse_f64(text):
    assert parse_f64(text) == float(text)


@pytest.mark.parametrize("text", ["", " 1", "1_0", ".", "e5", "abc"])
def test_parse_f64_errors(text):
    with pytest.raises(SerializationError):
        parse_f64(text)


def test_parse_decimal_keeps_scale():
    value = parse_decimal("50292.255931832196576203")
    assert value == Decimal("50292.255931832196576203")
    assert format_number(value) == "50292.255931832196576203"
    assert format_number(parse_decimal("1000.0")) == "1000.0"


@pytest.mark.parametrize("text", ["", "abc", "1e5", "1.2.3", "."])
def test_parse_decimal_errors(text):
    with pytest.raises(SerializationError):
        parse_decimal(text)


def test_optional_decimal():
    assert parse_optional_decimal(None) is None
    assert parse_optional_decimal("") is None
    assert parse_optional_decimal(7) is None
    assert parse_optional_decimal("1.5") == Decimal("1.5")
    with pytest.raises(SerializationError):
        parse_optional_decimal("x")


def test_optional_u64():
    assert parse_optional_u64(None) is None
    assert parse_optional_u64("") is None
    assert parse_optional_u64("42") == 42
    with pytest.raises(SerializationError):
        parse_optional_u64("-3")


def test_format_number_floats():
    assert format_number(1.0) == "1"
    assert format_number(0.1) == "0.1"
    assert parse_f64(format_number(1e-7)) == 1e-7
    assert "e" not in format_number(1e21).lower()


def test_format_optional_number():
    assert format_optional_number(None) is None
    assert format_optional_number(12) == "12"


@pytest.mark.parametrize("text", ["", "hello", "{\"a\":1}", "ünïcødé"])
def test_base64_round_trip(text):
    assert decode_base64_text(encode_base64_text(text)) == text


def test_base64_known_value():
    assert encode_base64_text("hello") == "aGVsbG8="


def test_base64_decode_without_padding():
    encoded = encode_base64_text("hello").rstrip("=")
    assert decode_base64_text(encoded) == "hello"


def test_base64_decode_lossy_utf8():
    assert decode_base64_text("/w==") == "\ufffd"


def test_base64_decode_errors():
    with pytest.raises(SerializationError):
        decode_base64_text("!!!!")
    with pytest.raises(SerializationError):
        decode_base64_text(None)


def test_optional_base64():
    assert encode_optional_base64_text(None) is None
    assert decode_optional_base64_text(None) is None
    assert decode_optional_base64_text("") is None
    assert decode_optional_base64_text(encode_optional_base64_text("value")) == "value"
    with pytest.raises(SerializationError):
        decode_optional_base64_text(123)