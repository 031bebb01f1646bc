import pytest

from terrakit.errors import SerializationError
from terrakit.types.rpc import (
    RPCConnectionStatus,
    RPCNetInfo,
    RPCResult,
    RPCStatus,
    RPCSyncInfo,
    RPCUnconfirmedTxs,
)


def _node_info():
    return {
        "protocol_version": {"p2p": "8", "block": "11", "app": "0"},
        "id": "node-id-placeholder",
        "listen_addr": "tcp://0.0.0.0:26656",
        "network": "bombay-12",
        "version": "0.34.14",
        "channels": "40202122233038606100",
        "moniker": "example-node",
        "other": {"tx_index": "on", "rpc_address": "tcp://127.0.0.1:26657"},
    }


def _status():
    return {
        "node_info": _node_info(),
        "sync_info": {
            "catching_up": False,
            "latest_block_height": "5000",
            "earliest_block_height": "1",
        },
        "validator_info": {"address": "75161033EF6E116BB345F07910A493030B08AD12", "voting_power": "0"},
    }


def test_status_parses():
    status = RPCStatus.from_dict(_status())
    assert status.node_info.moniker == "example-node"
    assert status.node_info.protocol_version.block == "11"
    assert status.node_info.other.tx_index == "on"
    assert status.sync_info.latest_block_height == 5000
    assert status.sync_info.catching_up is False
    assert status.validator_info.voting_power == 0


def test_sync_info_catching_up_must_be_bool():
    with pytest.raises(SerializationError):
        RPCSyncInfo.from_dict(
            {"catching_up": "no", "latest_block_height": "1", "earliest_block_height": "1"}
        )


def test_connection_status_reads_capitalised_duration():
    assert RPCConnectionStatus.from_dict({"Duration": "1500"}).duration == 1500
    with pytest.raises(SerializationError):
        RPCConnectionStatus.from_dict({"duration": "1500"})


def test_net_info_parses_peers():
    data = {
        "listening": True,
        "n_peers": "1",
        "peers": [
            {
                "node_info": _node_info(),
                "is_outbound": True,
                "connection_status": {"Duration": "99"},
                "remote_ip": "127.0.0.1",
            }
        ],
    }
    info = RPCNetInfo.from_dict(data)
    assert info.n_peers == 1
    assert len(info.peers) == 1
    assert info.peers[0].connection_status.duration == 99
    assert info.peers[0].remote_ip == "127.0.0.1"


def test_unconfirmed_txs():
    data = {"n_txs": "2", "total": "3", "total_bytes": "400", "txs": ["AAA=", "BBB="]}
    txs = RPCUnconfirmedTxs.from_dict(data)
    assert (txs.n_txs, txs.total, txs.total_bytes) == (2, 3, 400)
    assert txs.txs == ["AAA=", "BBB="]


def test_unconfirmed_txs_reject_non_strings():
    with pytest.raises(SerializationError):
        RPCUnconfirmedTxs.from_dict({"n_txs": "1", "total": "1", "total_bytes": "1", "txs": [1]})


def test_rpc_result_with_parser():
    envelope = {"jsonrpc": "2.0", "id": -1, "result": _status()}
    result = RPCResult.from_dict(envelope, RPCStatus.from_dict)
    assert result.jsonrpc == "2.0"
    assert result.id == -1
    assert result.result == RPCStatus.from_dict(_status())


def test_rpc_result_without_parser_keeps_raw():
    result = RPCResult.from_dict({"jsonrpc": "2.0", "id": 3, "result": {"a": 1}})
    assert result.result == {"a": 1}


def test_rpc_result_id_must_be_int():
    with pytest.raises(SerializationError):
        RPCResult.from_dict({"jsonrpc": "2.0", "id": "3", "result": {}})