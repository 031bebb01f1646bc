import pytest

from terrakit.errors import (
    Bech32DecodeError,
    Bech32DecodeExpandedError,
    ConversionError,
    ConversionLengthEd25519HexError,
    ConversionLengthError,
    ConversionPrefixEd25519Error,
    ImplementationError,
)
from terrakit.keys import PublicKey, bech32_decode, bech32_encode

ACCOUNT = "terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm"
VALOPER = "terravaloper1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztraasg"
VALCONS = "terravalcons1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vzlswpuf"
RAW_ADDRESS = "94c4c52a9777e3c3628e5cfe819f6e26a7f5bd82"
SECP_KEY = "02cf7ed0b5832538cd89b55084ce93399b186e381684b31388763801439cbdd20a"
TERRAPUB = "terrapub1addwnpepqt8ha594svjn3nvfk4ggfn5n8xd3sm3cz6ztxyugwcuqzsuuhhfq5nwzrf9"
VALCONSPUB_83 = (
    "terravalconspub1addwnpepqt8ha594svjn3nvfk4ggfn5n8xd3sm3cz6ztxyugwcuqzsuuhhfq5z3fguk"
)
VALCONSPUB_82 = (
    "terravalconspub1zcjduepqxrwvps0dn88x9s09h6nwrgrpv2vp5dz99309erlp0qmrx8y9ckmq49jx4n"
)


def test_conv():
    pub_key = PublicKey.from_account(ACCOUNT)
    assert pub_key.account() == ACCOUNT
    assert pub_key.operator_address() == VALOPER
    assert pub_key.tendermint() == VALCONS
    assert pub_key.raw_address.hex() == RAW_ADDRESS


def test_key_conversions():
    pub_key = PublicKey.from_public_key(bytes.fromhex(SECP_KEY))
    assert pub_key.operator_address() == VALOPER
    assert pub_key.account() == ACCOUNT
    assert pub_key.application_public_key() == TERRAPUB
    assert pub_key.tendermint_pubkey() == VALCONSPUB_83
    assert pub_key.raw_address.hex() == RAW_ADDRESS
    assert pub_key.raw_pub_key.hex() == "eb5ae98721" + SECP_KEY

    tendermint_key = PublicKey.from_tendermint_key(VALCONSPUB_83)
    assert tendermint_key.account() == ACCOUNT
    assert tendermint_key.application_public_key() == TERRAPUB
    assert tendermint_key.tendermint_pubkey() == VALCONSPUB_83

    ed_key = PublicKey.from_tendermint_key(VALCONSPUB_82)
    assert ed_key.tendermint_pubkey() == VALCONSPUB_82


def test_tendermint():
    secp_key = PublicKey.from_public_key(
        bytes.fromhex("02A1633CAFCC01EBFB6D78E39F687A1F0995C62FC95F51EAD10A02EE0BE551B5DC")
    )
    assert (
        secp_key.application_public_key()
        == "terrapub1addwnpepq2skx090esq7h7md0r3e76r6ruyet330e904r6k3pgpwuzl92x6actkch6g"
    )

    public_key = "4A25C6640A1F72B9C975338294EF51B6D1C33158BB6ECBA69FBC3FB5A33C9DCE"
    prefixed = PublicKey.pubkey_from_ed25519_public_key(bytes.fromhex(public_key))
    assert (
        bech32_encode("cosmosvalconspub", prefixed)
        == "cosmosvalconspub1zcjduepqfgjuveq2raetnjt4xwpffm63kmguxv2chdhvhf5lhslmtgeunh8qmf7exk"
    )
    tendermint = bech32_encode("terravalconspub", prefixed)
    ed_key = PublicKey.from_tendermint_key(tendermint)
    assert ed_key.raw_pub_key[5:].hex().upper() == public_key


def test_proposer():
    hex_str = "75161033EF6E116BB345F07910A493030B08AD12"
    cons_str = "terravalcons1w5tpqvl0dcgkhv697pu3pfynqv9s3tgj2d6q6l"
    cons_pub_str = (
        "terravalconspub1zcjduepqpxp3kxmn8yty9eh8a0e6tasdna04q7zsl88u7dyup7fv7t06pl9q342a8t"
    )
    pk = PublicKey.from_tendermint_key(cons_pub_str)
    assert pk.tendermint() == cons_str
    assert pk.raw_address.hex().upper() == hex_str

    pk2 = PublicKey.from_tendermint_address(hex_str)
    assert pk2.tendermint() == cons_str


def test_operator_address_round_trip():
    pk = PublicKey.from_operator_address(VALOPER)
    assert pk.account() == ACCOUNT
    assert pk.raw_pub_key is None


def test_from_raw_address():
    pk = PublicKey.from_raw_address(RAW_ADDRESS)
    assert pk.account() == ACCOUNT


def test_from_raw_address_bad_hex():
    with pytest.raises(ConversionError):
        PublicKey.from_raw_address("zz")


def test_bech32_round_trip():
    data = bytes(range(20))
    encoded = bech32_encode("terra", data)
    assert bech32_decode(encoded) == ("terra", data)
    assert bech32_decode(encoded.upper()) == ("terra", data)


def test_bech32_decode_rejects_bad_checksum():
    broken = ACCOUNT[:-1] + ("p" if ACCOUNT[-1] != "p" else "q")
    with pytest.raises(ValueError):
        bech32_decode(broken)


def test_bech32_decode_rejects_mixed_case():
    with pytest.raises(ValueError):
        bech32_decode("Terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm")


def test_from_account_wrong_prefix():
    with pytest.raises(Bech32DecodeExpandedError) as info:
        PublicKey.from_account(VALCONS)
    assert info.value.hrp == "terravalcons"
    assert info.value.wanted_prefix == "terra"
    assert info.value.wanted_length == 44


def test_from_account_invalid_bech32():
    with pytest.raises(ConversionError):
        PublicKey.from_account("terra1notvalid")


def test_from_tendermint_key_bad_length():
    with pytest.raises(ConversionLengthError) as info:
        PublicKey.from_tendermint_key(ACCOUNT)
    assert info.value.length == 44


def test_from_tendermint_address_bad_length():
    with pytest.raises(ConversionLengthEd25519HexError) as info:
        PublicKey.from_tendermint_address("abcd")
    assert info.value.length == 4


def test_missing_components():
    address_only = PublicKey.from_account(ACCOUNT)
    with pytest.raises(ImplementationError):
        address_only.application_public_key()
    with pytest.raises(ImplementationError):
        address_only.operator_address_public_key()
    with pytest.raises(ImplementationError):
        PublicKey().account()


def test_public_key_from_pubkey_secp():
    prefixed = PublicKey.pubkey_from_public_key(bytes.fromhex(SECP_KEY))
    assert PublicKey.public_key_from_pubkey(prefixed).hex() == SECP_KEY


def test_public_key_from_pubkey_ed25519():
    raw = bytes.fromhex("4A25C6640A1F72B9C975338294EF51B6D1C33158BB6ECBA69FBC3FB5A33C9DCE")
    prefixed = PublicKey.pubkey_from_ed25519_public_key(raw)
    assert PublicKey.public_key_from_pubkey(prefixed) == raw


def test_public_key_from_pubkey_ed25519_bad_length():
    with pytest.raises(ConversionError):
        PublicKey.public_key_from_pubkey(bytes.fromhex("1624de6420") + b"\x01\x02")


def test_public_key_from_pubkey_unknown_prefix():
    with pytest.raises(Bech32DecodeError):
        PublicKey.public_key_from_pubkey(b"\x00\x01\x02\x03\x04\x05")


def test_address_from_public_ed25519_key_bad_length():
    with pytest.raises(ConversionPrefixEd25519Error) as info:
        PublicKey.address_from_public_ed25519_key(b"\x01" * 10)
    assert info.value.length == 10


def test_address_from_public_key_length():
    assert len(PublicKey.address_from_public_key(bytes.fromhex(SECP_KEY))) == 20
    assert PublicKey.address_from_public_key(bytes.fromhex(SECP_KEY)).hex() == RAW_ADDRESS


def test_operator_address_public_key_prefix():
    pk = PublicKey.from_public_key(bytes.fromhex(SECP_KEY))
    hrp, data = bech32_decode(pk.operator_address_public_key())
    assert hrp == "terravaloperpub"
    assert data == pk.raw_pub_key