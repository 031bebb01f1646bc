"""Responses of the tendermint RPC endpoints: status, net info and the mempool."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from terrakit.codecs import parse_u64
from terrakit.core_types import _field
from terrakit.errors import SerializationError

T = TypeVar("T")


def _str(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _bool(data: Any, key: str) -> bool:
    value = _field(data, key)
    if not isinstance(value, bool):
        raise SerializationError(f"{key}: expected a boolean, got {value!r}")
    return value


def _list(data: Any, key: str) -> list[Any]:
    value = _field(data, key)
    if not isinstance(value, list):
        raise SerializationError(f"{key}: expected a list, got {value!r}")
    return value


@dataclass
class RPCProtocolVersion:
    """Protocol versions a node speaks."""

    p2p: str
    block: str
    app: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCProtocolVersion:
        return cls(_str(data, "p2p"), _str(data, "block"), _str(data, "app"))


@dataclass
class RPCProtocolOther:
    """Miscellaneous node settings."""

    tx_index: str
    rpc_address: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCProtocolOther:
        return cls(_str(data, "tx_index"), _str(data, "rpc_address"))


@dataclass
class RPCNodeInfo:
    """What a node says about itself."""

    protocol_version: RPCProtocolVersion
    id: str
    listen_addr: str
    network: str
    version: str
    channels: str
    moniker: str
    other: RPCProtocolOther

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCNodeInfo:
        return cls(
            RPCProtocolVersion.from_dict(_field(data, "protocol_version")),
            _str(data, "id"),
            _str(data, "listen_addr"),
            _str(data, "network"),
            _str(data, "version"),
            _str(data, "channels"),
            _str(data, "moniker"),
            RPCProtocolOther.from_dict(_field(data, "other")),
        )


@dataclass
class RPCSyncInfo:
    """How far a node has synced."""

    catching_up: bool
    latest_block_height: int
    earliest_block_height: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCSyncInfo:
        return cls(
            _bool(data, "catching_up"),
            parse_u64(_field(data, "latest_block_height")),
            parse_u64(_field(data, "earliest_block_height")),
        )


@dataclass
class RPCValidatorInfo:
    """The validator a node runs, if any."""

    address: str
    voting_power: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCValidatorInfo:
        return cls(_str(data, "address"), parse_u64(_field(data, "voting_power")))


@dataclass
class RPCStatus:
    """The answer of the ``/status`` endpoint."""

    node_info: RPCNodeInfo
    sync_info: RPCSyncInfo
    validator_info: RPCValidatorInfo

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCStatus:
        return cls(
            RPCNodeInfo.from_dict(_field(data, "node_info")),
            RPCSyncInfo.from_dict(_field(data, "sync_info")),
            RPCValidatorInfo.from_dict(_field(data, "validator_info")),
        )


@dataclass
class RPCConnectionStatus:
    """How long a peer has been connected."""

    duration: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCConnectionStatus:
        return cls(parse_u64(_field(data, "Duration")))


@dataclass
class RPCNetPeer:
    """A peer a node is connected to."""

    node_info: RPCNodeInfo
    is_outbound: bool
    connection_status: RPCConnectionStatus
    remote_ip: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCNetPeer:
        return cls(
            RPCNodeInfo.from_dict(_field(data, "node_info")),
            _bool(data, "is_outbound"),
            RPCConnectionStatus.from_dict(_field(data, "connection_status")),
            _str(data, "remote_ip"),
        )


@dataclass
class RPCNetInfo:
    """The answer of the ``/net_info`` endpoint."""

    listening: bool
    n_peers: int
    peers: list[RPCNetPeer]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCNetInfo:
        return cls(
            _bool(data, "listening"),
            parse_u64(_field(data, "n_peers")),
            [RPCNetPeer.from_dict(item) for item in _list(data, "peers")],
        )


@dataclass
class RPCUnconfirmedTxs:
    """The answer of the ``/unconfirmed_txs`` endpoint."""

    n_txs: int
    total: int
    total_bytes: int
    txs: list[str]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCUnconfirmedTxs:
        txs = _list(data, "txs")
        if not all(isinstance(tx, str) for tx in txs):
            raise SerializationError(f"txs: expected strings, got {txs!r}")
        return cls(
            parse_u64(_field(data, "n_txs")),
            parse_u64(_field(data, "total")),
            parse_u64(_field(data, "total_bytes")),
            list(txs),
        )


@dataclass
class RPCResult(Generic[T]):
    """The JSON-RPC envelope around every RPC answer."""

    jsonrpc: str
    id: int
    result: T

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        parse_result: Callable[[Any], T] | None = None,
    ) -> RPCResult[T]:
        request_id = _field(data, "id")
        if not isinstance(request_id, int) or isinstance(request_id, bool):
            raise SerializationError(f"id: expected an integer, got {request_id!r}")
        if not -(2**63) <= request_id < 2**63:
            raise SerializationError(f"id out of range {request_id!r}")
        raw = _field(data, "result")
        result = raw if parse_result is None else parse_result(raw)
        return cls(_str(data, "jsonrpc"), request_id, result)