"""Conversions between wire strings and Python values used in LCD/RPC JSON."""

from __future__ import annotations

import base64
import binascii
import math
import re
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from terrakit.errors import SerializationError

_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_DATE = (
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{1,2})-(?P<day>[0-9]{1,2})"
    r"T(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{1,2}):(?P<second>[0-9]{1,2})"
)
_FRACTIONAL = re.compile(_DATE + r"(?:\.(?P<fraction>[0-9]+))?")
_TZ_SUPPLIED = re.compile(_DATE + r"\.(?P<nanos>[0-9]{1,9})[+-][0-9]{2}:[0-9]{2}")
_SHORT_Z = re.compile(_DATE + r"Z")

_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)
_DECIMAL = re.compile(r"[+-]?(?:[0-9][0-9_]*(?:\.[0-9_]*)?|\.[0-9][0-9_]*)")


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise SerializationError(f"{what}: expected a string, got {value!r}")
    return value


def _fraction_micro(match: re.Match[str]) -> int:
    fraction = match.group("fraction")
    return int(fraction[:6].ljust(6, "0")) if fraction else 0


def _tz_micro(match: re.Match[str]) -> int:
    # The digits after the dot count whole nanoseconds here.
    return int(match.group("nanos")) // 1000


def _zero_micro(match: re.Match[str]) -> int:
    return 0


def _build(match: re.Match[str], microsecond: int) -> datetime:
    return datetime(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour")),
        int(match.group("minute")),
        int(match.group("second")),
        microsecond,
        tzinfo=timezone.utc,
    )


def parse_datetime(text: str) -> datetime:
    """Parse a chain timestamp into an aware UTC datetime.

    Any supplied offset is ignored; the wall-clock fields are read as UTC.
    """
    text = _require_str(text, "datetime")
    sliced = text[: max(len(text) - 4, 0)] if "." in text else text
    attempts: list[tuple[re.Pattern[str], str, Callable[[re.Match[str]], int]]] = [
        (_FRACTIONAL, sliced, _fraction_micro),
        (_TZ_SUPPLIED, text, _tz_micro),
        (_SHORT_Z, sliced, _zero_micro),
    ]
    for pattern, candidate, micro in attempts:
        match = pattern.fullmatch(candidate)
        if match is None:
            continue
        try:
            return _build(match, micro(match))
        except ValueError:
            continue
    raise SerializationError(f"invalid datetime {text!r}")


def format_datetime(value: datetime) -> str:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SS`` with a trimmed fraction."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    base = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    micro = value.microsecond
    if micro == 0:
        return base
    if micro % 1000 == 0:
        return f"{base}.{micro // 1000:03d}"
    return f"{base}.{micro:06d}"


def parse_optional_datetime(text: str | None) -> datetime | None:
    """Parse a timestamp that may be null."""
    return None if text is None else parse_datetime(text)


def format_optional_datetime(value: datetime | None) -> str | None:
    """Render a timestamp that may be absent."""
    return None if value is None else format_datetime(value)


def parse_u64(text: str) -> int:
    """Parse an unsigned 64-bit integer sent as a string."""
    text = _require_str(text, "u64")
    if not _UNSIGNED.fullmatch(text):
        raise SerializationError(f"invalid u64 {text!r}")
    value = int(text)
    if value > _U64_MAX:
        raise SerializationError(f"u64 out of range {text!r}")
    return value


def parse_i64(text: str) -> int:
    """Parse a signed 64-bit integer sent as a string."""
    text = _require_str(text, "i64")
    if not _SIGNED.fullmatch(text):
        raise SerializationError(f"invalid i64 {text!r}")
    value = int(text)
    if not _I64_MIN <= value <= _I64_MAX:
        raise SerializationError(f"i64 out of range {text!r}")
    return value


def parse_f64(text: str) -> float:
    """Parse a floating point number sent as a string."""
    text = _require_str(text, "f64")
    if not _FLOAT.fullmatch(text):
        raise SerializationError(f"invalid f64 {text!r}")
    return float(text)


def parse_decimal(text: str) -> Decimal:
    """Parse a decimal number sent as a string, keeping its scale."""
    text = _require_str(text, "decimal")
    if not _DECIMAL.fullmatch(text):
        raise SerializationError(f"invalid decimal {text!r}")
    try:
        return Decimal(text.replace("_", ""))
    except InvalidOperation as exc:
        raise SerializationError(f"invalid decimal {text!r}") from exc


def parse_optional_decimal(value: Any) -> Decimal | None:
    """Parse a decimal; anything that is not a non-empty string yields None."""
    if not isinstance(value, str) or value == "":
        return None
    return parse_decimal(value)


def parse_optional_u64(value: Any) -> int | None:
    """Parse a u64; anything that is not a non-empty string yields None."""
    if not isinstance(value, str) or value == "":
        return None
    return parse_u64(value)


def format_number(value: int | float | Decimal) -> str:
    """Render a number as the chain expects it in a JSON string."""
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    return str(int(value))


def format_optional_number(value: int | float | Decimal | None) -> str | None:
    """Render a number that may be absent."""
    return None if value is None else format_number(value)


def encode_base64_text(text: str) -> str:
    """Base64-encode the UTF-8 bytes of ``text``."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_base64_text(text: str) -> str:
    """Decode base64 into text, replacing invalid UTF-8 sequences."""
    text = _require_str(text, "base64")
    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SerializationError(f"invalid base64 {text!r}") from exc
    return raw.decode("utf-8", errors="replace")


def encode_optional_base64_text(value: str | None) -> str | None:
    """Base64-encode text that may be absent."""
    return None if value is None else encode_base64_text(value)


def decode_optional_base64_text(value: str | None) -> str | None:
    """Decode base64 text that may be null or empty."""
    if value is None:
        return None
    value = _require_str(value, "base64")
    if value == "":
        return None
    return decode_base64_text(value)