"""Account records returned by the auth module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from terrakit.codecs import (
    format_number,
    format_optional_number,
    parse_optional_u64,
    parse_u64,
)
from terrakit.core_types import PubKeySig, _field
from terrakit.errors import SerializationError


@dataclass
class AuthAccount:
    """An account's public key, account number and sequence.

    The account number and sequence are what a signed message needs.
    """

    address: str
    public_key: PubKeySig | None
    account_number: int
    sequence: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthAccount:
        address = _field(data, "address")
        if not isinstance(address, str):
            raise SerializationError(f"address: expected a string, got {address!r}")
        raw_key = data.get("public_key")
        return cls(
            address,
            None if raw_key is None else PubKeySig.from_dict(raw_key),
            parse_u64(_field(data, "account_number")),
            parse_optional_u64(data.get("sequence")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "public_key": None if self.public_key is None else self.public_key.to_dict(),
            "account_number": format_number(self.account_number),
            "sequence": format_optional_number(self.sequence),
        }