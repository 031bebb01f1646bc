"""Public keys and the bech32 addresses derived from them."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from Crypto.Hash import RIPEMD160
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from terrakit.errors import (
    Bech32DecodeError,
    Bech32DecodeExpandedError,
    ConversionEd25519Error,
    ConversionError,
    ConversionLengthEd25519HexError,
    ConversionLengthError,
    ConversionPrefixEd25519Error,
    ConversionSecp256k1Error,
    ImplementationError,
)

logger = logging.getLogger(__name__)

BECH32_PUBKEY_DATA_PREFIX_SECP256K1 = bytes([0xEB, 0x5A, 0xE9, 0x87, 0x21])
BECH32_PUBKEY_DATA_PREFIX_ED25519 = bytes([0x16, 0x24, 0xDE, 0x64, 0x20])

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_INDEX = {char: index for index, char in enumerate(_CHARSET)}
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_BECH32_CONST = 1
_BECH32M_CONST = 0x2BC830A3


def _polymod(values: Iterable[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(char) >> 5 for char in hrp] + [0] + [ord(char) & 31 for char in hrp]


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value >> from_bits:
            raise ValueError(f"invalid data value {value}")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise ValueError("invalid padding")
    return out


def _check_hrp(hrp: str) -> str:
    if not hrp or len(hrp) > 83:
        raise ValueError("invalid human readable part length")
    if any(not 33 <= ord(char) <= 126 for char in hrp):
        raise ValueError("invalid character in human readable part")
    if hrp.lower() != hrp and hrp.upper() != hrp:
        raise ValueError("mixed case human readable part")
    return hrp.lower()


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode bytes as a bech32 string with the given prefix.

    Raises ValueError if the prefix is not valid.
    """
    hrp = _check_hrp(hrp)
    words = _convert_bits(bytes(data), 8, 5, True)
    polymod = _polymod(_hrp_expand(hrp) + words + [0] * 6) ^ _BECH32_CONST
    checksum = [(polymod >> 5 * (5 - index)) & 31 for index in range(6)]
    return hrp + "1" + "".join(_CHARSET[word] for word in words + checksum)


def bech32_decode(text: str) -> tuple[str, bytes]:
    """Decode a bech32 (or bech32m) string into its prefix and bytes.

    Raises ValueError when the text is not valid bech32 or its payload
    does not convert cleanly back into bytes.
    """
    if len(text) < 8:
        raise ValueError("invalid length")
    separator = text.rfind("1")
    if separator < 0:
        raise ValueError("missing separator")
    raw_hrp, raw_data = text[:separator], text[separator + 1 :]
    if not raw_hrp or len(raw_data) < 6:
        raise ValueError("invalid length")
    if any(not 33 <= ord(char) <= 126 for char in text):
        raise ValueError("invalid character")
    if text.lower() != text and text.upper() != text:
        raise ValueError("mixed case")
    hrp = raw_hrp.lower()
    try:
        words = [_CHARSET_INDEX[char] for char in raw_data.lower()]
    except KeyError as exc:
        raise ValueError(f"invalid character {exc.args[0]!r}") from None
    if _polymod(_hrp_expand(hrp) + words) not in (_BECH32_CONST, _BECH32M_CONST):
        raise ValueError("invalid checksum")
    return hrp, bytes(_convert_bits(words[:-6], 5, 8, False))


def _decode_hex(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise ConversionError(text, exc) from exc


def _check_prefix_and_length(prefix: str, data: str, length: int) -> bytes:
    try:
        hrp, decoded = bech32_decode(data)
    except ValueError as exc:
        raise ConversionError(data, exc) from exc
    if hrp != prefix or len(data) != length:
        raise Bech32DecodeExpandedError(hrp, len(data), prefix, length)
    return decoded


def _encode(hrp: str, raw: bytes | None, what: str) -> str:
    if raw is None:
        if what == "public key":
            logger.warning("Missing Public Key. Can't continue")
        raise ImplementationError()
    try:
        return bech32_encode(hrp, raw)
    except ValueError as exc:
        raise Bech32DecodeError() from exc


@dataclass
class PublicKey:
    """A key's prefixed public bytes and raw address, either of which may be absent."""

    raw_pub_key: bytes | None = None
    raw_address: bytes | None = None

    @classmethod
    def from_public_key(cls, public_key: bytes) -> PublicKey:
        """Build from compressed secp256k1 public key bytes."""
        public_key = bytes(public_key)
        return cls(
            cls.pubkey_from_public_key(public_key),
            cls.address_from_public_key(public_key),
        )

    @classmethod
    def from_account(cls, acc_address: str) -> PublicKey:
        """Build from a ``terra1...`` account address."""
        return cls(None, _check_prefix_and_length("terra", acc_address, 44))

    @classmethod
    def from_tendermint_key(cls, tendermint_public_key: str) -> PublicKey:
        """Build from a ``terravalconspub1...`` key (83 chars secp256k1, 82 ed25519)."""
        length = len(tendermint_public_key)
        if length == 83:
            raw = _check_prefix_and_length("terravalconspub", tendermint_public_key, length)
            logger.debug("%s", raw.hex())
            if not raw.startswith(BECH32_PUBKEY_DATA_PREFIX_SECP256K1):
                raise ConversionSecp256k1Error()
            public_key = cls.public_key_from_pubkey(raw)
            return cls(raw, cls.address_from_public_key(public_key))
        if length == 82:
            raw = _check_prefix_and_length("terravalconspub", tendermint_public_key, length)
            logger.info("ED25519 public keys are not fully supported")
            if not raw.startswith(BECH32_PUBKEY_DATA_PREFIX_ED25519):
                raise ConversionEd25519Error()
            return cls(raw, cls.address_from_public_ed25519_key(raw))
        raise ConversionLengthError(length)

    @classmethod
    def from_tendermint_address(cls, tendermint_hex_address: str) -> PublicKey:
        """Build from a 40 character hex tendermint address."""
        length = len(tendermint_hex_address)
        if length != 40:
            raise ConversionLengthEd25519HexError(length)
        return cls(None, _decode_hex(tendermint_hex_address))

    @classmethod
    def from_operator_address(cls, valoper_address: str) -> PublicKey:
        """Build from a ``terravaloper1...`` operator address."""
        return cls(None, _check_prefix_and_length("terravaloper", valoper_address, 51))

    @classmethod
    def from_raw_address(cls, raw_address: str) -> PublicKey:
        """Build from a hex encoded raw address."""
        return cls(None, _decode_hex(raw_address))

    @staticmethod
    def pubkey_from_public_key(public_key: bytes) -> bytes:
        """Prefix a compressed secp256k1 public key for bech32 encoding."""
        return BECH32_PUBKEY_DATA_PREFIX_SECP256K1 + bytes(public_key)

    @staticmethod
    def pubkey_from_ed25519_public_key(public_key: bytes) -> bytes:
        """Prefix an ed25519 public key for bech32 encoding."""
        return BECH32_PUBKEY_DATA_PREFIX_ED25519 + bytes(public_key)

    @staticmethod
    def public_key_from_pubkey(pub_key: bytes) -> bytes:
        """Strip the bech32 data prefix from a prefixed public key."""
        pub_key = bytes(pub_key)
        if pub_key.startswith(BECH32_PUBKEY_DATA_PREFIX_SECP256K1):
            return pub_key[len(BECH32_PUBKEY_DATA_PREFIX_SECP256K1) :]
        if pub_key.startswith(BECH32_PUBKEY_DATA_PREFIX_ED25519):
            body = pub_key[len(BECH32_PUBKEY_DATA_PREFIX_ED25519) :]
            try:
                key = Ed25519PublicKey.from_public_bytes(body)
            except ValueError as exc:
                raise ConversionError(body.hex(), exc) from exc
            return key.public_bytes(Encoding.Raw, PublicFormat.Raw)
        logger.info("pub key does not start with BECH32 PREFIX")
        raise Bech32DecodeError()

    @staticmethod
    def address_from_public_key(public_key: bytes) -> bytes:
        """RIPEMD160(SHA256(key)) of a compressed secp256k1 public key."""
        digest = hashlib.sha256(bytes(public_key)).digest()
        return RIPEMD160.new(digest).digest()

    @staticmethod
    def address_from_public_ed25519_key(public_key: bytes) -> bytes:
        """First 20 bytes of SHA256 over a prefixed ed25519 key's 32 key bytes."""
        public_key = bytes(public_key)
        if len(public_key) != 32 + len(BECH32_PUBKEY_DATA_PREFIX_ED25519):
            raise ConversionPrefixEd25519Error(len(public_key), public_key.hex())
        logger.debug("address_from_public_ed25519_key public key - %s", public_key.hex())
        address = hashlib.sha256(public_key[5:]).digest()[:20]
        logger.debug("address_from_public_ed25519_key sha result - %s", address.hex())
        return address

    def account(self) -> str:
        """The ``terra1...`` account address."""
        return _encode("terra", self.raw_address, "address")

    def operator_address(self) -> str:
        """The ``terravaloper1...`` address used by validators."""
        return _encode("terravaloper", self.raw_address, "address")

    def application_public_key(self) -> str:
        """The ``terrapub1...`` application public key."""
        return _encode("terrapub", self.raw_pub_key, "public key")

    def operator_address_public_key(self) -> str:
        """The ``terravaloperpub1...`` validator operator public key."""
        return _encode("terravaloperpub", self.raw_pub_key, "pubkey")

    def tendermint(self) -> str:
        """The ``terravalcons1...`` consensus address."""
        return _encode("terravalcons", self.raw_address, "address")

    def tendermint_pubkey(self) -> str:
        """The ``terravalconspub1...`` consensus public key."""
        return _encode("terravalconspub", self.raw_pub_key, "pubkey")