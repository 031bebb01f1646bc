"""Smart contract messages: storing code, instantiating, executing and migrating."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any

from terrakit.codecs import format_number
from terrakit.core_types import Coin, Message
from terrakit.errors import SerializationError


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise SerializationError(f"invalid JSON: {exc}") from exc


@dataclass
class MsgExecuteContract:
    """Execute a message against a contract."""

    coins: list[Coin]
    contract: str
    execute_msg: Any
    sender: str

    @classmethod
    def create_from_value(
        cls,
        sender: str,
        contract: str,
        execute_msg: Any,
        coins: list[Coin],
    ) -> Message:
        internal = cls(list(coins), contract, execute_msg, sender)
        return Message("wasm/MsgExecuteContract", internal.to_dict())

    @classmethod
    def create_from_json(
        cls,
        sender: str,
        contract: str,
        execute_msg_json: str,
        coins: list[Coin],
    ) -> Message:
        return cls.create_from_value(sender, contract, _parse_json(execute_msg_json), coins)

    def to_dict(self) -> dict[str, Any]:
        return {
            "coins": [coin.to_dict() for coin in self.coins],
            "contract": self.contract,
            "execute_msg": self.execute_msg,
            "sender": self.sender,
        }


@dataclass
class MsgStoreCode:
    """Upload contract byte code, base64 encoded."""

    sender: str
    wasm_byte_code: str

    @classmethod
    def create_from_b64(cls, sender: str, wasm_byte_code: str) -> Message:
        return Message("wasm/MsgStoreCode", cls(sender, wasm_byte_code).to_dict())

    @classmethod
    def create_from_file(cls, sender: str, file_name: str | PathLike[str]) -> Message:
        encoded = base64.b64encode(Path(file_name).read_bytes()).decode("ascii")
        return cls.create_from_b64(sender, encoded)

    def to_dict(self) -> dict[str, str]:
        return {"sender": self.sender, "wasm_byte_code": self.wasm_byte_code}


@dataclass
class MsgInstantiateContract:
    """Create a contract from stored code."""

    admin: str | None
    code_id: int
    sender: str
    init_coins: list[Coin]
    init_msg: Any

    @classmethod
    def create_from_json(
        cls,
        sender: str,
        admin: str | None,
        code_id: int,
        init_msg: str,
        init_coins: list[Coin],
    ) -> Message:
        internal = cls(admin, code_id, sender, list(init_coins), _parse_json(init_msg))
        return Message("wasm/MsgInstantiateContract", internal.to_dict())

    @classmethod
    def create_from_file(
        cls,
        sender: str,
        admin: str | None,
        code_id: int,
        init_file: str | PathLike[str],
        init_coins: list[Coin],
    ) -> Message:
        """Read the init message from a file, filling in its placeholders."""
        contents = Path(init_file).read_text(encoding="utf-8")
        filled = cls.replace_parameters(sender, admin, code_id, contents)
        return cls.create_from_json(sender, admin, code_id, filled, init_coins)

    @staticmethod
    def replace_parameters(
        sender: str,
        admin: str | None,
        code_id: int,
        instantiate_str: str,
    ) -> str:
        """Substitute ``##SENDER##``, ``##CODE_ID##`` and ``##ADMIN##``."""
        return (
            instantiate_str.replace("##SENDER##", sender)
            .replace("##CODE_ID##", str(code_id))
            .replace("##ADMIN##", admin or "")
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "admin": self.admin,
            "code_id": format_number(self.code_id),
            "sender": self.sender,
            "init_coins": [coin.to_dict() for coin in self.init_coins],
            "init_msg": self.init_msg,
        }


@dataclass
class MsgMigrateContract:
    """Move a contract to new code."""

    admin: str
    contract: str
    new_code_id: int
    migrate_msg: Any

    @classmethod
    def create_from_json(
        cls,
        admin: str,
        contract: str,
        new_code_id: int,
        migrate_msg: str,
    ) -> Message:
        internal = cls(admin, contract, new_code_id, _parse_json(migrate_msg))
        return Message("wasm/MsgMigrateContract", internal.to_dict())

    @classmethod
    def create_from_file(
        cls,
        admin: str,
        contract: str,
        new_code_id: int,
        migrate_file: str | PathLike[str],
    ) -> Message:
        """Read the migrate message from a file, filling in its placeholders."""
        contents = Path(migrate_file).read_text(encoding="utf-8")
        filled = cls.replace_parameters(admin, contract, new_code_id, contents)
        return cls.create_from_json(admin, contract, new_code_id, filled)

    @staticmethod
    def replace_parameters(
        admin: str,
        contract: str,
        new_code_id: int,
        migrate_str: str,
    ) -> str:
        """Substitute ``##ADMIN##``, ``##CONTRACT##`` and ``##NEW_CODE_ID##``."""
        return (
            migrate_str.replace("##ADMIN##", admin)
            .replace("##CONTRACT##", contract)
            .replace("##NEW_CODE_ID##", str(new_code_id))
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "admin": self.admin,
            "contract": self.contract,
            "new_code_id": format_number(self.new_code_id),
            "migrate_msg": self.migrate_msg,
        }