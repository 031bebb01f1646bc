"""Validators, delegations and unbondings as returned by the staking module."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from terrakit.codecs import (
    format_datetime,
    format_number,
    parse_datetime,
    parse_decimal,
    parse_f64,
    parse_u64,
)
from terrakit.core_types import _field
from terrakit.errors import SerializationError
from terrakit.types.tendermint import TendermintPublicKey


def _str(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _opt_str(data: Any, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _list(data: Any, key: str) -> list[Any]:
    value = _field(data, key)
    if not isinstance(value, list):
        raise SerializationError(f"{key}: expected a list, got {value!r}")
    return value


@dataclass
class ValidatorDescription:
    """A validator's public description."""

    moniker: str
    identity: str | None
    website: str | None
    security_contact: str | None
    details: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorDescription:
        return cls(
            _str(data, "moniker"),
            _opt_str(data, "identity"),
            _opt_str(data, "website"),
            _opt_str(data, "security_contact"),
            _opt_str(data, "details"),
        )


@dataclass
class ValidatorCommissionRates:
    """Current, maximum and maximum daily change of the commission rate."""

    rate: float
    max_rate: float
    max_change_rate: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorCommissionRates:
        return cls(
            parse_f64(_field(data, "rate")),
            parse_f64(_field(data, "max_rate")),
            parse_f64(_field(data, "max_change_rate")),
        )


@dataclass
class ValidatorCommission:
    """Commission rates and when they last changed."""

    commission_rates: ValidatorCommissionRates
    update_time: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorCommission:
        return cls(
            ValidatorCommissionRates.from_dict(_field(data, "commission_rates")),
            parse_datetime(_field(data, "update_time")),
        )


@dataclass
class Validator:
    """A validator as the staking module reports it."""

    operator_address: str
    consensus_pubkey: TendermintPublicKey
    jailed: bool | None
    status: int
    tokens: int
    delegator_shares: float
    description: ValidatorDescription
    unbonding_time: datetime
    commission: ValidatorCommission
    min_self_delegation: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Validator:
        operator_address = _str(data, "operator_address")
        jailed = data.get("jailed")
        if jailed is not None and not isinstance(jailed, bool):
            raise SerializationError(f"jailed: expected a boolean, got {jailed!r}")
        status = _field(data, "status")
        if not isinstance(status, int) or isinstance(status, bool) or not 0 <= status <= 0xFFFF:
            raise SerializationError(f"status: expected a u16, got {status!r}")
        return cls(
            operator_address,
            TendermintPublicKey.from_dict(_field(data, "consensus_pubkey")),
            jailed,
            status,
            parse_u64(_field(data, "tokens")),
            parse_f64(_field(data, "delegator_shares")),
            ValidatorDescription.from_dict(_field(data, "description")),
            parse_datetime(_field(data, "unbonding_time")),
            ValidatorCommission.from_dict(_field(data, "commission")),
            parse_u64(_field(data, "min_self_delegation")),
        )

    def to_dict(self) -> dict[str, Any]:
        rates = self.commission.commission_rates
        return {
            "operator_address": self.operator_address,
            "consensus_pubkey": {
                "type": self.consensus_pubkey.s_type,
                "value": self.consensus_pubkey.value,
            },
            "jailed": self.jailed,
            "status": self.status,
            "tokens": format_number(self.tokens),
            "delegator_shares": format_number(self.delegator_shares),
            "description": asdict(self.description),
            "unbonding_time": format_datetime(self.unbonding_time),
            "commission": {
                "commission_rates": {
                    "rate": format_number(rates.rate),
                    "max_rate": format_number(rates.max_rate),
                    "max_change_rate": format_number(rates.max_change_rate),
                },
                "update_time": format_datetime(self.commission.update_time),
            },
            "min_self_delegation": format_number(self.min_self_delegation),
        }


@dataclass
class ValidatorDelegationBalance:
    """The amount a delegation is worth."""

    denom: str
    amount: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorDelegationBalance:
        return cls(_str(data, "denom"), parse_decimal(_field(data, "amount")))


@dataclass
class ValidatorDelegationComponent:
    """Who delegated to whom, in shares."""

    delegator_address: str
    validator_address: str
    shares: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorDelegationComponent:
        return cls(
            _str(data, "delegator_address"),
            _str(data, "validator_address"),
            parse_decimal(_field(data, "shares")),
        )


@dataclass
class ValidatorDelegation:
    """A delegation and its balance."""

    delegation: ValidatorDelegationComponent
    balance: ValidatorDelegationBalance

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorDelegation:
        return cls(
            ValidatorDelegationComponent.from_dict(_field(data, "delegation")),
            ValidatorDelegationBalance.from_dict(_field(data, "balance")),
        )


@dataclass
class ValidatorUnbondingDelegationEntry:
    """One unbonding: when it started, when it completes and how much."""

    creation_height: int
    completion_time: datetime
    initial_balance: int
    balance: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorUnbondingDelegationEntry:
        return cls(
            parse_u64(_field(data, "creation_height")),
            parse_datetime(_field(data, "completion_time")),
            parse_u64(_field(data, "initial_balance")),
            parse_u64(_field(data, "balance")),
        )


@dataclass
class ValidatorUnbondingDelegation:
    """The unbondings of one delegator from one validator."""

    delegator_address: str
    validator_address: str
    entries: list[ValidatorUnbondingDelegationEntry]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorUnbondingDelegation:
        return cls(
            _str(data, "delegator_address"),
            _str(data, "validator_address"),
            [ValidatorUnbondingDelegationEntry.from_dict(item) for item in _list(data, "entries")],
        )


@dataclass
class ValidatorDelegationsV1Response:
    """Delegations in the newer response format."""

    delegation_responses: list[ValidatorDelegation]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorDelegationsV1Response:
        return cls(
            [ValidatorDelegation.from_dict(item) for item in _list(data, "delegation_responses")]
        )