# terrakit

Building blocks for working with a Terra node: the JSON shapes the LCD and
Tendermint RPC endpoints return, the transaction messages you sign and
broadcast, and conversion between the different bech32 address forms.

## Installing

```
pip install terrakit
```

## Coins

```python
from decimal import Decimal
from terrakit.core_types import Coin

coin = Coin.parse("1000uluna")
print(coin.denom, coin.amount)          # uluna 1000

rates = Coin.parse_coins("21.88ucad,22.70uaud,0.0uthb")
print([c.denom for c in rates])         # sorted by denom: ['uaud', 'ucad', 'uthb']

Coin.create("uusd", Decimal("12.5"))
```

`Coin.parse` returns `None` for text that is not a coin (IBC denominations
such as `ibc/EB2C...` are accepted); `Coin.parse_coins` raises
`terrakit.errors.CoinParseError` when any part of the list fails.
`str(coin)` gives the `nnnXXXX` form back, with a zero amount written as
`0.0XXXX`.

## Addresses and keys

```python
from terrakit.keys import PublicKey

key = PublicKey.from_account("terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm")
key.operator_address()   # 'terravaloper1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztraasg'
key.tendermint()         # 'terravalcons1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vzlswpuf'
```

Keys can also be built with `PublicKey.from_public_key` (compressed
secp256k1 bytes), `from_tendermint_key` (a `terravalconspub1...` string,
secp256k1 or ed25519), `from_operator_address`, `from_tendermint_address`
(40 hex characters) and `from_raw_address` (hex). Keys that carry the public
key also yield `application_public_key()`, `operator_address_public_key()`
and `tendermint_pubkey()`; asking for a form whose data is missing raises
`ImplementationError`. Malformed input raises one of the conversion errors
in `terrakit.errors`, all subclasses of `TerraError`.

`terrakit.keys.bech32_encode` and `bech32_decode` are available for other
prefixes.

## Messages

```python
from terrakit.core_types import Coin
from terrakit.keys import PublicKey
from terrakit.messages.bank import MsgSend

sender = PublicKey.from_raw_address("11" * 20).account()
receiver = PublicKey.from_raw_address("22" * 20).account()

send = MsgSend.create_single(sender, receiver, Coin.parse("1000uluna"))
send.to_dict()   # {'type': 'bank/MsgSend', 'value': {...}}
```

Other messages live in `terrakit.messages.distribution`, `.market`,
`.oracle`, `.slashing`, `.staking` and `.wasm`. Every `create...` class
method returns a `terrakit.core_types.Message`. The wasm messages can read
code or JSON from files (`MsgStoreCode.create_from_file`,
`MsgInstantiateContract.create_from_file`,
`MsgMigrateContract.create_from_file`), filling in placeholders such as
`##SENDER##` and `##CODE_ID##`.

A list of messages goes into a `StdSignMsg`, whose `to_json()` is the
compact text that gets signed. `StdSignature.create` pairs a 64-byte
signature with the signer's public key, and `StdTx.from_std_sign_msg`
gives the body to post to `/txs` with mode `"sync"`, `"async"` or
`"block"`. `terrakit.types.tx.TxEstimate.create` builds a fee estimation
request.

Oracle feeders can compute the vote hash directly:

```python
from terrakit.messages.oracle import generate_hash

generate_hash("df59", "0.0uthb,17.44uusd", "terravaloper1example")
```

## Responses

Every response type has a `from_dict` class method that accepts the decoded
JSON, converting number strings, decimals, timestamps and base64 fields, and
raising `SerializationError` on malformed data:

```python
from terrakit.core_types import LCDResult
from terrakit.types.auth import AuthAccount

result = LCDResult.from_dict(payload, AuthAccount.from_dict)
result.height, result.result.account_number
```

See `terrakit.types.staking`, `.oracle`, `.rpc`, `.tendermint`, `.tx` and
`.wasm` for the rest. `TxResultBlock.get_attribute_from_result_logs` and
`V1TxResponse.get_attribute_from_logs` pull values out of transaction logs;
`ValidatorSetResult.combine` joins two pages of a validator set taken at the
same height. The wire conversions themselves are in `terrakit.codecs`.

## What terrakit does not do

- It does no networking: there is no LCD, FCD or RPC client. You fetch the
  JSON and post the request bodies yourself.
- It holds no private keys and derives none from mnemonics; it does not
  sign. You supply the signature bytes.
- It has no command line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```