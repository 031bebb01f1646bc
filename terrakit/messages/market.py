"""Market messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from terrakit.core_types import Coin, Message


@dataclass
class MsgSwap:
    """Swap an offered coin into another denomination for a trader."""

    ask_denom: str
    offer_coin: Coin
    trader: str

    @classmethod
    def create(cls, offer_coin: Coin, ask_denom: str, trader: str) -> Message:
        return Message("market/MsgSwap", cls(ask_denom, offer_coin, trader).to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "ask_denom": self.ask_denom,
            "offer_coin": self.offer_coin.to_dict(),
            "trader": self.trader,
        }