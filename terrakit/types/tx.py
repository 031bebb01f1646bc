"""Transaction broadcast results, transaction records and fee estimates."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from terrakit.codecs import format_number, parse_datetime, parse_u64
from terrakit.core_types import Coin, Message, _field
from terrakit.errors import SerializationError

T = TypeVar("T")


def _str(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _opt_str(data: Any, key: str) -> str | None:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object holding `{key}`, got {data!r}")
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _check_count(key: str, value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise SerializationError(f"{key}: expected a non-negative integer, got {value!r}")
    return value


def _count(data: Any, key: str) -> int:
    return _check_count(key, _field(data, key))


def _opt_count(data: Any, key: str) -> int | None:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object holding `{key}`, got {data!r}")
    value = data.get(key)
    return None if value is None else _check_count(key, value)


def _list(data: Any, key: str, parse: Callable[[Any], T]) -> list[T]:
    value = _field(data, key)
    if not isinstance(value, list):
        raise SerializationError(f"{key}: expected a list, got {value!r}")
    return [parse(item) for item in value]


def _opt_list(data: Any, key: str, parse: Callable[[Any], T]) -> list[T] | None:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object holding `{key}`, got {data!r}")
    if data.get(key) is None:
        return None
    return _list(data, key, parse)


def _raw(value: Any) -> Any:
    return value


@dataclass
class TxResultAsync:
    """The answer to an async broadcast: only the transaction hash."""

    txhash: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxResultAsync:
        return cls(_str(data, "txhash"))


@dataclass
class TxResultBlockAttribute:
    """A key and optional value of a log event."""

    key: str
    value: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxResultBlockAttribute:
        return cls(_str(data, "key"), _opt_str(data, "value"))


@dataclass
class TxResultBlockEvent:
    """An event in a transaction log."""

    s_type: str
    attributes: list[TxResultBlockAttribute]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxResultBlockEvent:
        return cls(
            _str(data, "type"),
            _list(data, "attributes", TxResultBlockAttribute.from_dict),
        )

    def get_attribute(self, key: str) -> list[TxResultBlockAttribute]:
        """All attributes named ``key``, in order."""
        return [attr for attr in self.attributes if attr.key == key]

    def get_first_value(self, key: str) -> str | None:
        """Value of the first attribute named ``key``; empty if it has none."""
        found = self.get_attribute(key)
        if not found:
            return None
        return found[0].value or ""


@dataclass
class TxResultSync:
    """The answer to a sync broadcast; a code means the check failed."""

    txhash: str
    code: int | None
    raw_log: str
    logs: list[TxResultBlockEvent] | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxResultSync:
        return cls(
            _str(data, "txhash"),
            _opt_count(data, "code"),
            _str(data, "raw_log"),
            _opt_list(data, "logs", TxResultBlockEvent.from_dict),
        )

    def is_success(self) -> bool:
        return self.code is None


@dataclass
class TxResultBlockMsg:
    """The log of one message of a transaction."""

    msg_index: int | None
    events: list[TxResultBlockEvent]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxResultBlockMsg:
        return cls(
            _opt_count(data, "msg_index"),
            _list(data, "events", TxResultBlockEvent.from_dict),
        )


@dataclass
class TxBlockMsgInner:
    """The contract-related parts of a message in a transaction."""

    sender: str | None
    contract: str | None
    execute_msg: Any

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxBlockMsgInner:
        return cls(
            _opt_str(data, "sender"),
            _opt_str(data, "contract"),
            data.get("execute_msg"),
        )


@dataclass
class TxBlockMsg:
    """A message in a transaction."""

    value: TxBlockMsgInner

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxBlockMsg:
        return cls(TxBlockMsgInner.from_dict(_field(data, "value")))


@dataclass
class TxBlockValue:
    """The messages of a transaction."""

    msg: list[TxBlockMsg]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxBlockValue:
        return cls(_list(data, "msg", TxBlockMsg.from_dict))


@dataclass
class TxBlock:
    """A transaction as recorded in a block."""

    value: TxBlockValue

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxBlock:
        return cls(TxBlockValue.from_dict(_field(data, "value")))


def _attributes_from_logs(
    logs: Iterable[TxResultBlockMsg] | None,
    event_type: str,
    attribute_key: str,
) -> list[tuple[int, str]]:
    found: list[tuple[int, str]] = []
    for log_part in logs or ():
        event = next((e for e in log_part.events if e.s_type == event_type), None)
        if event is None:
            continue
        value = next(
            (
                attr.value
                for attr in event.attributes
                if attr.key == attribute_key and attr.value is not None
            ),
            None,
        )
        if value is not None:
            found.append((log_part.msg_index or 0, value))
    return found


def _events_from_logs(
    logs: Iterable[TxResultBlockMsg] | None, event_type: str
) -> list[TxResultBlockEvent]:
    return [
        event
        for log_part in logs or ()
        for event in log_part.events
        if event.s_type == event_type
    ]


@dataclass
class TxResultBlock:
    """A transaction record from the older ``/txs`` endpoint."""

    height: int
    txhash: str
    codespace: str | None
    code: int | None
    raw_log: str
    logs: list[TxResultBlockMsg] | None
    timestamp: datetime
    tx: TxBlock | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxResultBlock:
        raw_tx = data.get("tx") if isinstance(data, dict) else None
        return cls(
            parse_u64(_field(data, "height")),
            _str(data, "txhash"),
            _opt_str(data, "codespace"),
            _opt_count(data, "code"),
            _str(data, "raw_log"),
            _opt_list(data, "logs", TxResultBlockMsg.from_dict),
            parse_datetime(_field(data, "timestamp")),
            None if raw_tx is None else TxBlock.from_dict(raw_tx),
        )

    def get_attribute_from_result_logs(
        self, event_type: str, attribute_key: str
    ) -> list[tuple[int, str]]:
        """Per message log: the first value of ``attribute_key`` in the first matching event."""
        return _attributes_from_logs(self.logs, event_type, attribute_key)

    def get_events(self, event_type: str) -> list[TxResultBlockEvent]:
        """All events of the given type across the logs."""
        return _events_from_logs(self.logs, event_type)


@dataclass
class TxBaseReq:
    """The common part of a fee estimation request."""

    chain_id: str
    from_address: str
    gas_adjustment: float
    gas: str
    gas_prices: list[Coin]

    def to_dict(self) -> dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "from": self.from_address,
            "gas_adjustment": format_number(self.gas_adjustment),
            "gas": self.gas,
            "gas_prices": [coin.to_dict() for coin in self.gas_prices],
        }


@dataclass
class TxEstimate:
    """A request to estimate the fee of some messages."""

    base_req: TxBaseReq
    msgs: list[Message] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        chain_id: str,
        sender: str,
        msgs: Iterable[Message],
        gas_adjustment: float,
        gas_prices: Iterable[Coin],
    ) -> TxEstimate:
        base_req = TxBaseReq(chain_id, sender, gas_adjustment, "auto", list(gas_prices))
        return cls(base_req, list(msgs))

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_req": self.base_req.to_dict(),
            "msgs": [msg.to_dict() for msg in self.msgs],
        }


@dataclass
class TxFee:
    """An estimated fee."""

    amount: list[Coin]
    gas: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxFee:
        return cls(
            _list(data, "amount", Coin.from_dict),
            parse_u64(_field(data, "gas")),
        )


@dataclass
class TxFeeResult:
    """The answer of a fee estimation."""

    fee: TxFee

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TxFeeResult:
        return cls(TxFee.from_dict(_field(data, "fee")))


@dataclass
class V1TxBody:
    """The body of a transaction in the v1 format."""

    messages: list[Any]
    memo: str
    timeout_height: int
    extension_options: list[Any]
    non_critical_extension_options: list[Any]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> V1TxBody:
        return cls(
            _list(data, "messages", _raw),
            _str(data, "memo"),
            parse_u64(_field(data, "timeout_height")),
            _list(data, "extension_options", _raw),
            _list(data, "non_critical_extension_options", _raw),
        )


@dataclass
class V1Tx:
    """A transaction in the v1 format."""

    body: V1TxBody
    auth_info: Any
    signatures: list[Any]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> V1Tx:
        return cls(
            V1TxBody.from_dict(_field(data, "body")),
            _field(data, "auth_info"),
            _list(data, "signatures", _raw),
        )


@dataclass
class V1TxResponse:
    """The execution record of a transaction in the v1 format."""

    height: int
    txhash: str
    codespace: str
    code: int
    data: str
    raw_log: str
    logs: list[TxResultBlockMsg] | None
    info: str
    gas_wanted: int
    gas_used: int
    tx: Any
    timestamp: datetime
    events: list[Any] | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> V1TxResponse:
        return cls(
            parse_u64(_field(data, "height")),
            _str(data, "txhash"),
            _str(data, "codespace"),
            _count(data, "code"),
            _str(data, "data"),
            _str(data, "raw_log"),
            _opt_list(data, "logs", TxResultBlockMsg.from_dict),
            _str(data, "info"),
            parse_u64(_field(data, "gas_wanted")),
            parse_u64(_field(data, "gas_used")),
            _field(data, "tx"),
            parse_datetime(_field(data, "timestamp")),
            _opt_list(data, "events", _raw),
        )

    def get_attribute_from_logs(
        self, event_type: str, attribute_key: str
    ) -> list[tuple[int, str]]:
        """Per message log: the first value of ``attribute_key`` in the first matching event."""
        return _attributes_from_logs(self.logs, event_type, attribute_key)

    def get_events(self, event_type: str) -> list[TxResultBlockEvent]:
        """All events of the given type across the logs."""
        return _events_from_logs(self.logs, event_type)


@dataclass
class V1Pagination:
    """Paging information of a v1 list answer."""

    next_key: str | None
    total: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> V1Pagination:
        return cls(_opt_str(data, "next_key"), parse_u64(_field(data, "total")))


@dataclass
class V1TxsResult:
    """A page of transactions in the v1 format."""

    txs: list[V1Tx]
    tx_responses: list[V1TxResponse]
    pagination: V1Pagination

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> V1TxsResult:
        return cls(
            _list(data, "txs", V1Tx.from_dict),
            _list(data, "tx_responses", V1TxResponse.from_dict),
            V1Pagination.from_dict(_field(data, "pagination")),
        )


@dataclass
class V1TxResult:
    """A single transaction and its execution record in the v1 format."""

    tx: V1Tx
    tx_response: V1TxResponse

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> V1TxResult:
        return cls(
            V1Tx.from_dict(_field(data, "tx")),
            V1TxResponse.from_dict(_field(data, "tx_response")),
        )