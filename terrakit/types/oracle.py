"""Oracle parameters, votes and pre-votes as returned by the LCD service."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from terrakit.codecs import format_number, parse_decimal, parse_f64, parse_u64
from terrakit.core_types import _field
from terrakit.errors import SerializationError


def _str(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


@dataclass
class OracleParameterWhiteList:
    """A denomination the oracle accepts, with its tobin tax."""

    name: str
    tobin_tax: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OracleParameterWhiteList:
        return cls(_str(data, "name"), parse_f64(_field(data, "tobin_tax")))

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "tobin_tax": format_number(self.tobin_tax)}


@dataclass
class OracleParameters:
    """The oracle module's parameters."""

    vote_period: int
    vote_threshold: float
    reward_band: float
    reward_distribution_window: int
    whitelist: list[OracleParameterWhiteList]
    slash_fraction: float
    slash_window: int
    min_valid_per_window: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OracleParameters:
        whitelist = _field(data, "whitelist")
        if not isinstance(whitelist, list):
            raise SerializationError(f"whitelist: expected a list, got {whitelist!r}")
        return cls(
            parse_u64(_field(data, "vote_period")),
            parse_f64(_field(data, "vote_threshold")),
            parse_f64(_field(data, "reward_band")),
            parse_u64(_field(data, "reward_distribution_window")),
            [OracleParameterWhiteList.from_dict(item) for item in whitelist],
            parse_f64(_field(data, "slash_fraction")),
            parse_u64(_field(data, "slash_window")),
            parse_f64(_field(data, "min_valid_per_window")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "vote_period": format_number(self.vote_period),
            "vote_threshold": format_number(self.vote_threshold),
            "reward_band": format_number(self.reward_band),
            "reward_distribution_window": format_number(self.reward_distribution_window),
            "whitelist": [item.to_dict() for item in self.whitelist],
            "slash_fraction": format_number(self.slash_fraction),
            "slash_window": format_number(self.slash_window),
            "min_valid_per_window": format_number(self.min_valid_per_window),
        }


@dataclass
class OracleVotes:
    """An exchange rate vote cast by a validator."""

    exchange_rate: Decimal
    denom: str
    voter: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OracleVotes:
        return cls(
            parse_decimal(_field(data, "exchange_rate")),
            _str(data, "denom"),
            _str(data, "voter"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "exchange_rate": format_number(self.exchange_rate),
            "denom": self.denom,
            "voter": self.voter,
        }


@dataclass
class OraclePreVotes:
    """A pre-vote hash submitted by a validator."""

    hash: str
    denom: str
    voter: str
    submit_block: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OraclePreVotes:
        return cls(
            _str(data, "hash"),
            _str(data, "denom"),
            _str(data, "voter"),
            parse_u64(_field(data, "submit_block")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "hash": self.hash,
            "denom": self.denom,
            "voter": self.voter,
            "submit_block": format_number(self.submit_block),
        }