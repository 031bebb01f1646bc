"""Oracle feeder messages: exchange rate votes, pre-votes and feed delegation."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from dataclasses import dataclass

from terrakit.core_types import Coin, Message


def generate_hash(salt: str, exchange_string: str, validator: str) -> str:
    """First 40 hex digits of SHA256 over ``salt:exchange_string:validator``."""
    to_hash = f"{salt}:{exchange_string}:{validator}"
    return hashlib.sha256(to_hash.encode("utf-8")).hexdigest()[:40]


@dataclass
class MsgAggregateExchangeRatePreVote:
    """The hash of the next vote, announced ahead of it."""

    feeder: str
    hash: str
    validator: str

    @classmethod
    def create(cls, hash: str, feeder: str, validator: str) -> Message:
        return Message(
            "oracle/MsgAggregateExchangeRatePrevote",
            cls(feeder, hash, validator).to_dict(),
        )

    def to_dict(self) -> dict[str, str]:
        return {"feeder": self.feeder, "hash": self.hash, "validator": self.validator}


@dataclass
class MsgAggregateExchangeRateVote:
    """A vote on exchange rates; the salt feeds the next round's pre-vote."""

    exchange_rates: str
    feeder: str
    salt: str
    validator: str

    @classmethod
    def create_internal(
        cls,
        salt: str,
        exchange_rates: Iterable[Coin],
        feeder: str,
        validator: str,
    ) -> MsgAggregateExchangeRateVote:
        """Build the vote with its rates sorted by denomination."""
        rates = sorted(exchange_rates, key=lambda coin: coin.denom)
        return cls(",".join(str(coin) for coin in rates), feeder, salt, validator)

    @classmethod
    def create(
        cls,
        salt: str,
        exchange_rates: Iterable[Coin],
        feeder: str,
        validator: str,
    ) -> Message:
        return cls.create_from_internal(
            cls.create_internal(salt, exchange_rates, feeder, validator)
        )

    @classmethod
    def create_from_internal(cls, internal: MsgAggregateExchangeRateVote) -> Message:
        return Message("oracle/MsgAggregateExchangeRateVote", internal.to_dict())

    def generate_hash(self, previous_salt: str) -> str:
        return generate_hash(previous_salt, self.exchange_rates, self.validator)

    def gen_pre_vote(self, previous_salt: str) -> Message:
        """The pre-vote message hashing these rates with ``previous_salt``."""
        return MsgAggregateExchangeRatePreVote.create(
            self.generate_hash(previous_salt), self.feeder, self.validator
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "exchange_rates": self.exchange_rates,
            "feeder": self.feeder,
            "salt": self.salt,
            "validator": self.validator,
        }


@dataclass
class MsgDelegateFeedConsent:
    """Let another account feed oracle prices for a validator."""

    delegate: str
    operator: str

    @classmethod
    def create(cls, operator: str, delegate: str) -> Message:
        return Message("oracle/MsgDelegateFeedConsent", cls(delegate, operator).to_dict())

    def to_dict(self) -> dict[str, str]:
        return {"delegate": self.delegate, "operator": self.operator}