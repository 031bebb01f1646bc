"""Blocks, block results, events and validator sets from tendermint."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from terrakit.codecs import (
    decode_base64_text,
    decode_optional_base64_text,
    encode_base64_text,
    encode_optional_base64_text,
    format_number,
    parse_datetime,
    parse_i64,
    parse_u64,
)
from terrakit.core_types import _field
from terrakit.errors import SerializationError, TendermintValidatorSetError

T = TypeVar("T")


def _str(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _opt_str(data: Any, key: str) -> str | None:
    value = _field(data, key) if key in data else None
    if value is not None and not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _count(data: Any, key: str) -> int:
    value = _field(data, key)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise SerializationError(f"{key}: expected a non-negative integer, got {value!r}")
    return value


def _bool(data: Any, key: str) -> bool:
    value = _field(data, key)
    if not isinstance(value, bool):
        raise SerializationError(f"{key}: expected a boolean, got {value!r}")
    return value


def _list(data: Any, key: str, parse: Callable[[Any], T]) -> list[T]:
    value = _field(data, key)
    if not isinstance(value, list):
        raise SerializationError(f"{key}: expected a list, got {value!r}")
    return [parse(item) for item in value]


def _opt_list(data: Any, key: str, parse: Callable[[Any], T]) -> list[T] | None:
    if data.get(key) is None:
        return None
    return _list(data, key, parse)


def _identity_str(value: Any) -> str:
    if not isinstance(value, str):
        raise SerializationError(f"expected a string, got {value!r}")
    return value


@dataclass
class BlockIdParts:
    """The part set header of a block id."""

    total: int
    hash: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockIdParts:
        return cls(_count(data, "total"), _str(data, "hash"))


@dataclass
class BlockId:
    """A block's hash and part set header."""

    hash: str
    parts: BlockIdParts

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockId:
        return cls(_str(data, "hash"), BlockIdParts.from_dict(_field(data, "parts")))


@dataclass
class BlockHeader:
    """A block header; ``version_block`` is the header's block protocol version."""

    version_block: int
    chain_id: str
    height: int
    time: datetime
    last_block_id: BlockId
    last_commit_hash: str
    data_hash: str
    validators_hash: str
    next_validators_hash: str
    consensus_hash: str
    app_hash: str
    last_results_hash: str
    evidence_hash: str
    proposer_address: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockHeader:
        version = _field(data, "version")
        return cls(
            parse_u64(_field(version, "block")),
            _str(data, "chain_id"),
            parse_u64(_field(data, "height")),
            parse_datetime(_field(data, "time")),
            BlockId.from_dict(_field(data, "last_block_id")),
            _str(data, "last_commit_hash"),
            _str(data, "data_hash"),
            _str(data, "validators_hash"),
            _str(data, "next_validators_hash"),
            _str(data, "consensus_hash"),
            _str(data, "app_hash"),
            _str(data, "last_results_hash"),
            _str(data, "evidence_hash"),
            _str(data, "proposer_address"),
        )


@dataclass
class BlockSignature:
    """A validator's commit signature; flag 1 means no signature, 2 a signature."""

    block_id_flag: int
    validator_address: str
    timestamp: datetime
    signature: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockSignature:
        return cls(
            _count(data, "block_id_flag"),
            _str(data, "validator_address"),
            parse_datetime(_field(data, "timestamp")),
            _opt_str(data, "signature"),
        )


@dataclass
class BlockCommit:
    """The commit of the previous block."""

    height: int
    round: int
    block_id: BlockId
    signatures: list[BlockSignature]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockCommit:
        return cls(
            parse_u64(_field(data, "height")),
            _count(data, "round"),
            BlockId.from_dict(_field(data, "block_id")),
            _list(data, "signatures", BlockSignature.from_dict),
        )


@dataclass
class Block:
    """A block: header, transactions, evidence and last commit."""

    header: BlockHeader
    txs: list[str] | None
    evidence: dict[str, Any]
    last_commit: BlockCommit

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Block:
        block_data = _field(data, "data")
        if not isinstance(block_data, dict):
            raise SerializationError(f"data: expected an object, got {block_data!r}")
        evidence = _field(data, "evidence")
        if not isinstance(evidence, dict):
            raise SerializationError(f"evidence: expected an object, got {evidence!r}")
        return cls(
            BlockHeader.from_dict(_field(data, "header")),
            _opt_list(block_data, "txs", _identity_str),
            evidence,
            BlockCommit.from_dict(_field(data, "last_commit")),
        )


@dataclass
class BlockResult:
    """A block together with its id."""

    block_id: BlockId
    block: Block

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockResult:
        return cls(
            BlockId.from_dict(_field(data, "block_id")),
            Block.from_dict(_field(data, "block")),
        )


@dataclass
class EventAttribute:
    """An event attribute; key and value arrive base64 encoded."""

    key: str
    value: str | None
    index: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventAttribute:
        return cls(
            decode_base64_text(_field(data, "key")),
            decode_optional_base64_text(_field(data, "value")),
            _bool(data, "index"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": encode_base64_text(self.key),
            "value": encode_optional_base64_text(self.value),
            "index": self.index,
        }


@dataclass
class EventType:
    """An event and its attributes."""

    s_type: str
    attributes: list[EventAttribute]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventType:
        return cls(_str(data, "type"), _list(data, "attributes", EventAttribute.from_dict))

    def attribute_map(self) -> dict[str, str | None]:
        """Attributes by key; a later attribute with the same key wins."""
        return {attr.key: attr.value for attr in self.attributes}


@dataclass
class RPCTxResult:
    """The result of one transaction in a block."""

    code: int
    data: str | None
    log: str
    info: str
    gas_wanted: str
    gas_used: str
    events: list[EventType]
    codespace: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCTxResult:
        return cls(
            _count(data, "code"),
            _opt_str(data, "data"),
            _str(data, "log"),
            _str(data, "info"),
            _str(data, "gas_wanted"),
            _str(data, "gas_used"),
            _list(data, "events", EventType.from_dict),
            _str(data, "codespace"),
        )


@dataclass
class RPCValidatorUpdate:
    """A validator set change announced at the end of a block."""

    key_type: str
    ed25519: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCValidatorUpdate:
        pub_key = _field(_field(data, "pub_key"), "Sum")
        return cls(_str(pub_key, "type"), _str(_field(pub_key, "value"), "ed25519"))


@dataclass
class BlockResultsResult:
    """The answer of the ``/block_results`` endpoint."""

    height: int
    txs_results: list[RPCTxResult] | None
    begin_block_events: list[EventType] | None
    end_block_events: list[EventType] | None
    validator_updates: list[RPCValidatorUpdate] | None
    consensus_param_updates: Any

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockResultsResult:
        height = parse_u64(_field(data, "height"))
        return cls(
            height,
            _opt_list(data, "txs_results", RPCTxResult.from_dict),
            _opt_list(data, "begin_block_events", EventType.from_dict),
            _opt_list(data, "end_block_events", EventType.from_dict),
            _opt_list(data, "validator_updates", RPCValidatorUpdate.from_dict),
            data.get("consensus_param_updates"),
        )


@dataclass
class TendermintPublicKey:
    """A typed consensus public key."""

    s_type: str
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TendermintPublicKey:
        return cls(_str(data, "type"), _str(data, "value"))


@dataclass
class Validator:
    """A member of the validator set."""

    address: str
    pub_key: TendermintPublicKey
    proposer_priority: int
    voting_power: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Validator:
        return cls(
            _str(data, "address"),
            TendermintPublicKey.from_dict(_field(data, "pub_key")),
            parse_i64(_field(data, "proposer_priority")),
            parse_u64(_field(data, "voting_power")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "pub_key": {"type": self.pub_key.s_type, "value": self.pub_key.value},
            "proposer_priority": format_number(self.proposer_priority),
            "voting_power": format_number(self.voting_power),
        }


@dataclass
class ValidatorSetResult:
    """A page of the validator set at a block height."""

    block_height: int
    validators: list[Validator]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorSetResult:
        return cls(
            parse_u64(_field(data, "block_height")),
            _list(data, "validators", Validator.from_dict),
        )

    def combine(self, other: ValidatorSetResult) -> ValidatorSetResult:
        """Join two pages of the same height; different heights raise."""
        if self.block_height != other.block_height:
            raise TendermintValidatorSetError(self.block_height, other.block_height)
        return ValidatorSetResult(self.block_height, self.validators + other.validators)