"""Contract code, contract info, parameters and raw store queries."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from terrakit.codecs import parse_u64
from terrakit.core_types import _field
from terrakit.errors import SerializationError


def _str(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise SerializationError(f"{key}: expected a string, got {value!r}")
    return value


def _decode_utf8_base64(text: str) -> str:
    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SerializationError(f"invalid base64 {text!r}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SerializationError(f"base64 {text!r} does not hold UTF-8 text") from exc


@dataclass
class WasmCode:
    """Stored contract code."""

    code_id: int
    code_hash: str
    creator: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmCode:
        return cls(
            parse_u64(_field(data, "code_id")),
            _str(data, "code_hash"),
            _str(data, "creator"),
        )


@dataclass
class WasmCodeResult:
    """Stored contract code at a height."""

    height: int
    result: WasmCode

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmCodeResult:
        return cls(parse_u64(_field(data, "height")), WasmCode.from_dict(_field(data, "result")))


@dataclass
class WasmContractInfo:
    """An instantiated contract."""

    address: str
    owner: str
    code_id: int
    init_msg: str
    migratable: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmContractInfo:
        migratable = _field(data, "migratable")
        if not isinstance(migratable, bool):
            raise SerializationError(f"migratable: expected a boolean, got {migratable!r}")
        return cls(
            _str(data, "address"),
            _str(data, "owner"),
            parse_u64(_field(data, "code_id")),
            _str(data, "init_msg"),
            migratable,
        )


@dataclass
class WasmContractInfoResult:
    """An instantiated contract at a height."""

    height: int
    result: WasmContractInfo

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmContractInfoResult:
        return cls(
            parse_u64(_field(data, "height")),
            WasmContractInfo.from_dict(_field(data, "result")),
        )


@dataclass
class WasmParameter:
    """The wasm module's limits."""

    max_contract_size: int
    max_contract_gas: int
    max_contract_msg_size: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmParameter:
        return cls(
            parse_u64(_field(data, "max_contract_size")),
            parse_u64(_field(data, "max_contract_gas")),
            parse_u64(_field(data, "max_contract_msg_size")),
        )


@dataclass
class WasmParameterResult:
    """The wasm module's limits at a height."""

    height: int
    result: WasmParameter

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmParameterResult:
        return cls(
            parse_u64(_field(data, "height")),
            WasmParameter.from_dict(_field(data, "result")),
        )


@dataclass
class WasmQueryRaw:
    """A raw store entry; key and value are base64 encoded."""

    key: str
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmQueryRaw:
        return cls(_str(data, "key"), _str(data, "value"))

    def decoded(self) -> tuple[str, str]:
        """Key and value decoded from base64 as UTF-8 text."""
        return _decode_utf8_base64(self.key), _decode_utf8_base64(self.value)


@dataclass
class WasmQueryRawResult:
    """A raw store entry at a height."""

    height: int
    result: WasmQueryRaw

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WasmQueryRawResult:
        return cls(
            parse_u64(_field(data, "height")),
            WasmQueryRaw.from_dict(_field(data, "result")),
        )