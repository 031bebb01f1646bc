"""Coins, fees, signed messages and the envelopes the LCD service returns."""

from __future__ import annotations

import base64
import json
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generic, TypeVar

from terrakit.codecs import format_number, parse_decimal, parse_u64
from terrakit.errors import CoinParseError, SerializationError

T = TypeVar("T")

_COIN = re.compile(r"([0-9]+\.?[0-9]*)([a-zA-Z]+)")
_IBC_COIN = re.compile(r"([0-9]+\.?[0-9]*)(ibc/[a-fA-F0-9]+)")


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object holding `{key}`, got {data!r}")
    try:
        return data[key]
    except KeyError:
        raise SerializationError(f"missing field `{key}`") from None


def _sorted_json(value: Any) -> Any:
    """Order object keys the way a generic JSON value is ordered on the wire."""
    if isinstance(value, dict):
        return {key: _sorted_json(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted_json(item) for item in value]
    return value


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@dataclass
class Message:
    """A typed message carried by a transaction; ``value`` keeps sorted keys."""

    msg_type: str
    value: dict[str, Any]

    def __post_init__(self) -> None:
        self.value = _sorted_json(self.value)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.msg_type, "value": self.value}


@dataclass(frozen=True)
class Coin:
    """An amount of a denomination, always in its ``uXXX`` form."""

    denom: str
    amount: Decimal

    @classmethod
    def create(cls, denom: str, amount: Decimal | int | str) -> Coin:
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        return cls(denom, amount)

    @classmethod
    def parse(cls, text: str) -> Coin | None:
        """Parse ``nnnXXXX``; returns None when the text is not a coin."""
        match = _COIN.fullmatch(text) or _IBC_COIN.fullmatch(text)
        if match is None:
            return None
        return cls(match.group(2), Decimal(match.group(1)))

    @classmethod
    def parse_coins(cls, text: str) -> list[Coin]:
        """Parse a comma separated list of coins, sorted by denomination."""
        coins: list[Coin] = []
        for part in text.split(","):
            try:
                coin = cls.parse(part)
            except SerializationError as exc:
                raise CoinParseError(text) from exc
            if coin is None:
                raise CoinParseError(text)
            coins.append(coin)
        return sorted(coins, key=lambda coin: coin.denom)

    def to_dict(self) -> dict[str, str]:
        return {"amount": format_number(self.amount), "denom": self.denom}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Coin:
        denom = _field(data, "denom")
        if not isinstance(denom, str):
            raise SerializationError(f"denom: expected a string, got {denom!r}")
        return cls(denom, parse_decimal(_field(data, "amount")))

    def __str__(self) -> str:
        if self.amount == 0:
            return f"0.0{self.denom}"
        return f"{format_number(self.amount)}{self.denom}"


@dataclass
class StdFee:
    """The fee a transaction pays, in coins and gas."""

    amount: list[Coin]
    gas: int

    @classmethod
    def create_single(cls, amount: Coin, gas: int) -> StdFee:
        return cls([amount], gas)

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": [coin.to_dict() for coin in self.amount],
            "gas": format_number(self.gas),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StdFee:
        return cls(
            [Coin.from_dict(item) for item in _field(data, "amount")],
            parse_u64(_field(data, "gas")),
        )


@dataclass
class StdSignMsg:
    """The part of a transaction that gets signed; field order matters."""

    account_number: int
    chain_id: str
    fee: StdFee
    memo: str
    msgs: list[Message]
    sequence: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "account_number": format_number(self.account_number),
            "chain_id": self.chain_id,
            "fee": self.fee.to_dict(),
            "memo": self.memo,
            "msgs": [msg.to_dict() for msg in self.msgs],
            "sequence": format_number(self.sequence),
        }

    def to_json(self) -> str:
        """Compact JSON of the message, as it is signed."""
        return _compact_json(self.to_dict())


def _compress_public_key(public_key: bytes) -> bytes:
    if len(public_key) == 65 and public_key[0] == 0x04:
        prefix = b"\x03" if public_key[-1] & 1 else b"\x02"
        return prefix + public_key[1:33]
    return public_key


@dataclass
class PubKeySig:
    """The public key sent along with a signature."""

    stype: str
    value: str

    @classmethod
    def from_public_key(cls, public_key: bytes) -> PubKeySig:
        """Build from secp256k1 key bytes; uncompressed keys are compressed first."""
        raw = _compress_public_key(bytes(public_key))
        return cls("tendermint/PubKeySecp256k1", base64.b64encode(raw).decode("ascii"))

    def to_dict(self) -> dict[str, str]:
        return {"type": self.stype, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PubKeySig:
        return cls(_field(data, "type"), _field(data, "value"))


@dataclass
class StdSignature:
    """A signature together with the public key that made it."""

    signature: str
    pub_key: PubKeySig

    @classmethod
    def create(cls, signature: bytes, public_key: bytes) -> StdSignature:
        signature = bytes(signature)
        if len(signature) != 64:
            raise SerializationError(f"signature must be 64 bytes, got {len(signature)}")
        return cls(
            base64.b64encode(signature).decode("ascii"),
            PubKeySig.from_public_key(public_key),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"signature": self.signature, "pub_key": self.pub_key.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StdSignature:
        return cls(_field(data, "signature"), PubKeySig.from_dict(_field(data, "pub_key")))


@dataclass
class StdTx:
    """The transaction body posted to the LCD service."""

    msgs: list[Message]
    fee: StdFee
    signatures: list[StdSignature]
    memo: str
    mode: str

    @classmethod
    def from_std_sign_msg(
        cls,
        std_sign_msg: StdSignMsg,
        signatures: Iterable[StdSignature],
        mode: str,
    ) -> StdTx:
        """Wrap a signed message; mode is ``async``, ``sync`` or ``block``."""
        return cls(
            list(std_sign_msg.msgs),
            std_sign_msg.fee,
            list(signatures),
            std_sign_msg.memo,
            mode,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tx": {
                "msg": [msg.to_dict() for msg in self.msgs],
                "fee": self.fee.to_dict(),
                "signatures": [sig.to_dict() for sig in self.signatures],
                "memo": self.memo,
            },
            "mode": self.mode,
        }


@dataclass
class LCDResult(Generic[T]):
    """The height-stamped envelope every LCD response comes in."""

    height: int
    result: T

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        parse_result: Callable[[Any], T] | None = None,
    ) -> LCDResult[T]:
        raw = _field(data, "result")
        result = raw if parse_result is None else parse_result(raw)
        return cls(parse_u64(_field(data, "height")), result)

    def to_dict(self, dump_result: Callable[[T], Any] | None = None) -> dict[str, Any]:
        result = self.result if dump_result is None else dump_result(self.result)
        return {"height": format_number(self.height), "result": result}


@dataclass
class LCDTypeValue(Generic[T]):
    """A ``{"type": ..., "value": ...}`` pair."""

    stype: str
    value: T = field()

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        parse_value: Callable[[Any], T] | None = None,
    ) -> LCDTypeValue[T]:
        raw = _field(data, "value")
        value = raw if parse_value is None else parse_value(raw)
        return cls(_field(data, "type"), value)

    def to_dict(self, dump_value: Callable[[T], Any] | None = None) -> dict[str, Any]:
        value = self.value if dump_value is None else dump_value(self.value)
        return {"type": self.stype, "value": value}