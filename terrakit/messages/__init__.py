"""Transaction messages for bank, distribution, market, oracle, slashing, staking and wasm."""