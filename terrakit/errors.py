"""Exceptions raised by the terrakit package."""

from __future__ import annotations

from http import HTTPStatus


class TerraError(Exception):
    """Base class of every error raised by the library."""


class SerializationError(TerraError, ValueError):
    """A value could not be converted to or from its wire representation."""


class CoinParseError(TerraError, ValueError):
    """Text could not be parsed into one or more coins."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Can't parse `{text}` into a coin")
        self.text = text


class Bech32DecodeError(TerraError):
    """A bech32 string could not be produced or decoded."""

    def __init__(self) -> None:
        super().__init__("Bech32 Decode Error")


class Bech32DecodeExpandedError(TerraError):
    """A bech32 key had the wrong prefix or length."""

    def __init__(self, hrp: str, length: int, wanted_prefix: str, wanted_length: int) -> None:
        super().__init__(
            f"Bech32 Decode Error: Key Failed prefix {hrp} or length {length} "
            f"Wanted:{wanted_prefix}/{wanted_length}"
        )
        self.hrp = hrp
        self.length = length
        self.wanted_prefix = wanted_prefix
        self.wanted_length = wanted_length


class ConversionError(TerraError):
    """A string could not be converted into a public key."""

    def __init__(self, key: str, cause: Exception | None = None) -> None:
        super().__init__(f"Unable to convert into public key `{key}`")
        self.key = key
        self.cause = cause


class ConversionSecp256k1Error(TerraError):
    """An 83 character key lacked the SECP256K1 prefix."""

    def __init__(self) -> None:
        super().__init__("83 length-missing SECP256K1 prefix")


class ConversionEd25519Error(TerraError):
    """An 82 character key lacked the ED25519 prefix."""

    def __init__(self) -> None:
        super().__init__("82 length-missing ED25519 prefix")


class ConversionLengthError(TerraError):
    """A tendermint key was neither 82 nor 83 characters long."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Expected Key length of 82 or 83 length was {length}")
        self.length = length


class ConversionLengthEd25519HexError(TerraError):
    """A tendermint hex address was not 40 characters long."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Expected Key length of 40 length was {length}")
        self.length = length


class ConversionPrefixEd25519Error(TerraError):
    """An ED25519 key did not have the expected prefixed length."""

    def __init__(self, length: int, hex_key: str) -> None:
        super().__init__(
            "Expected ED25519 key of length 32 with a BECH32 ED25519 prefix of 5 chars"
            f" - Len {length} - Hex {hex_key}"
        )
        self.length = length
        self.hex_key = hex_key


class ImplementationError(TerraError):
    """A component needed for the operation is missing."""

    def __init__(self) -> None:
        super().__init__("Bad Implementation. Missing Component")


def _describe_status(status: int | str) -> str:
    try:
        code = int(status)
        return f"{code} {HTTPStatus(code).phrase}"
    except ValueError:
        return str(status)


class LCDResponseError(TerraError):
    """The LCD service answered with an unsuccessful HTTP status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Terra `{_describe_status(status)}` LCD - {body}")
        self.status = status
        self.body = body


class TxResultError(TerraError):
    """A submitted transaction returned an error code."""

    def __init__(self, code: int, codespace: str, log: str) -> None:
        super().__init__(f"TX submit returned `{code}` - {codespace} '{log}'")
        self.code = code
        self.codespace = codespace
        self.log = log


class GasPriceError(TerraError):
    """No gas price is known for a denomination."""

    def __init__(self, denom: str) -> None:
        super().__init__(f"No price found for Gas using denom {denom}")
        self.denom = denom


class NoGasOptsError(TerraError):
    """A transaction was attempted without gas options."""

    def __init__(self) -> None:
        super().__init__("Can't call Transactions without some gas rules")


class TendermintValidatorSetError(TerraError):
    """The pages of a validator set came from different heights."""

    def __init__(self, first_height: int, second_height: int) -> None:
        super().__init__(
            "Attempting to fetch validator set in parts, and failed Height mismatch "
            f"{first_height} {second_height}"
        )
        self.first_height = first_height
        self.second_height = second_height


class TxNotFoundError(TerraError):
    """A transaction was still missing after all retries."""

    def __init__(self, tx_hash: str, attempts: int) -> None:
        super().__init__(f"Transaction {tx_hash} not found after {attempts} attempts")
        self.tx_hash = tx_hash
        self.attempts = attempts


class PhrasingError(TerraError):
    """A mnemonic phrase is malformed."""

    def __init__(self) -> None:
        super().__init__("Mnemonic - Bad Phrase")


class MissingPhraseError(TerraError):
    """A mnemonic phrase was required but not given."""

    def __init__(self) -> None:
        super().__init__("Mnemonic - Missing Phrase")


class CLIError(TerraError):
    """Base class of errors raised by command line front ends."""


class MissingArgumentError(CLIError):
    """A required command line argument was not supplied."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"Bad Implementation. Missing CLI Argument {argument}")
        self.argument = argument