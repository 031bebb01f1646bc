"""Slashing messages."""

from __future__ import annotations

from dataclasses import dataclass

from terrakit.core_types import Message


@dataclass
class MsgUnjail:
    """Ask for a jailed validator to be released."""

    address: str

    @classmethod
    def create(cls, address: str) -> Message:
        return Message("slashing/MsgUnjail", cls(address).to_dict())

    def to_dict(self) -> dict[str, str]:
        return {"address": self.address}