"""Typed views of LCD and RPC responses: auth, oracle, rpc, staking, tendermint, tx and wasm."""