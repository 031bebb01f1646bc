"""Staking messages: creating and editing validators, delegating and redelegating."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from terrakit.codecs import format_number, format_optional_number
from terrakit.core_types import Coin, Message

_DO_NOT_MODIFY = "[do-not-modify]"


@dataclass
class ValidatorDescription:
    """A validator's public description.

    In edit messages, fields that should stay as they are hold ``[do-not-modify]``.
    """

    details: str
    identity: str
    moniker: str
    security_contact: str
    website: str

    @classmethod
    def create_create(
        cls,
        details: str | None,
        identity: str | None,
        moniker: str,
        security_contact: str | None,
        website: str | None,
    ) -> ValidatorDescription:
        """Description for a new validator; missing fields become empty."""
        return cls(
            details or "",
            identity or "",
            moniker,
            security_contact or "",
            website or "",
        )

    @classmethod
    def create_edit(
        cls,
        details: str | None,
        identity: str | None,
        moniker: str | None,
        security_contact: str | None,
        website: str | None,
    ) -> ValidatorDescription:
        """Description for an edit; missing fields are left unchanged."""

        def keep(value: str | None) -> str:
            return _DO_NOT_MODIFY if value is None else value

        return cls(
            keep(details),
            keep(identity),
            keep(moniker),
            keep(security_contact),
            keep(website),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "details": self.details,
            "identity": self.identity,
            "moniker": self.moniker,
            "security_contact": self.security_contact,
            "website": self.website,
        }


@dataclass
class ValidatorCommission:
    """A validator's commission rates."""

    max_change_rate: Decimal
    max_rate: Decimal
    rate: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "max_change_rate": format_number(self.max_change_rate),
            "max_rate": format_number(self.max_rate),
            "rate": format_number(self.rate),
        }


@dataclass
class MsgCreateValidator:
    """Register a new validator."""

    commission: ValidatorCommission
    delegator_address: str
    description: ValidatorDescription
    min_self_delegation: Decimal
    pubkey: str
    value: Coin
    validator_address: str

    @classmethod
    def create(
        cls,
        description: ValidatorDescription,
        commission: ValidatorCommission,
        min_self_delegation: Decimal,
        delegator_address: str,
        validator_address: str,
        pubkey: str,
        value: Coin,
    ) -> Message:
        internal = cls(
            commission,
            delegator_address,
            description,
            min_self_delegation,
            pubkey,
            value,
            validator_address,
        )
        return Message("staking/MsgCreateValidator", internal.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "commission": self.commission.to_dict(),
            "delegator_address": self.delegator_address,
            "description": self.description.to_dict(),
            "min_self_delegation": format_number(self.min_self_delegation),
            "pubkey": self.pubkey,
            "value": self.value.to_dict(),
            "validator_address": self.validator_address,
        }


@dataclass
class MsgEditValidator:
    """Change a validator's description, commission rate or minimum self delegation."""

    address: str
    commission_rate: Decimal | None
    description: ValidatorDescription
    min_self_delegation: Decimal | None

    @classmethod
    def create(
        cls,
        description: ValidatorDescription,
        address: str,
        commission_rate: Decimal | None,
        min_self_delegation: Decimal | None,
    ) -> Message:
        internal = cls(address, commission_rate, description, min_self_delegation)
        return Message("staking/MsgEditValidator", internal.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "commission_rate": format_optional_number(self.commission_rate),
            "description": self.description.to_dict(),
            "min_self_delegation": format_optional_number(self.min_self_delegation),
        }


@dataclass
class MsgUndelegate:
    """Withdraw a delegation from a validator."""

    amount: Coin
    delegator_address: str
    validator_address: str

    @classmethod
    def create(cls, delegator_address: str, validator_address: str, amount: Coin) -> Message:
        internal = cls(amount, delegator_address, validator_address)
        return Message("staking/MsgUndelegate", internal.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount.to_dict(),
            "delegator_address": self.delegator_address,
            "validator_address": self.validator_address,
        }


@dataclass
class MsgDelegate:
    """Delegate coins to a validator."""

    amount: Coin
    delegator_address: str
    validator_address: str

    @classmethod
    def create(cls, delegator_address: str, validator_address: str, amount: Coin) -> Message:
        internal = cls(amount, delegator_address, validator_address)
        return Message("staking/MsgDelegate", internal.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount.to_dict(),
            "delegator_address": self.delegator_address,
            "validator_address": self.validator_address,
        }


@dataclass
class MsgBeginRedelegate:
    """Move a delegation from one validator to another."""

    amount: Coin
    delegator_address: str
    validator_dst_address: str
    validator_src_address: str

    @classmethod
    def create(
        cls,
        delegator_address: str,
        validator_dst_address: str,
        validator_src_address: str,
        amount: Coin,
    ) -> Message:
        internal = cls(amount, delegator_address, validator_dst_address, validator_src_address)
        return Message("staking/MsgBeginRedelegate", internal.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount.to_dict(),
            "delegator_address": self.delegator_address,
            "validator_dst_address": self.validator_dst_address,
            "validator_src_address": self.validator_src_address,
        }