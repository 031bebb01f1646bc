"""Distribution messages."""

from __future__ import annotations

from dataclasses import dataclass

from terrakit.core_types import Message


@dataclass
class MsgWithdrawValidatorCommission:
    """Withdraw the commission a validator has earned."""

    validator_address: str

    @classmethod
    def create(cls, validator_address: str) -> Message:
        return Message(
            "distribution/MsgWithdrawValidatorCommission",
            cls(validator_address).to_dict(),
        )

    def to_dict(self) -> dict[str, str]:
        return {"validator_address": self.validator_address}


@dataclass
class MsgWithdrawDelegationReward:
    """Withdraw the reward of a delegation to a validator."""

    delegator_address: str
    validator_address: str

    @classmethod
    def create(cls, delegator_address: str, validator_address: str) -> Message:
        return Message(
            "distribution/MsgWithdrawDelegationReward",
            cls(delegator_address, validator_address).to_dict(),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "delegator_address": self.delegator_address,
            "validator_address": self.validator_address,
        }