"""Bank messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from terrakit.core_types import Coin, Message


@dataclass
class MsgSend:
    """Send coins from one address to another."""

    amount: list[Coin]
    from_address: str
    to_address: str

    @classmethod
    def create(cls, from_address: str, to_address: str, amount: list[Coin]) -> Message:
        internal = cls(list(amount), from_address, to_address)
        return Message("bank/MsgSend", internal.to_dict())

    @classmethod
    def create_single(cls, from_address: str, to_address: str, amount: Coin) -> Message:
        return cls.create(from_address, to_address, [amount])

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": [coin.to_dict() for coin in self.amount],
            "from_address": self.from_address,
            "to_address": self.to_address,
        }