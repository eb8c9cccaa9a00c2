"""Tests for the typed JSON-RPC wrappers."""

from __future__ import annotations

from typing import Any

import pytest
from _fakes import FakeNode, ScriptedTransport, SimulatedFailure, succeed

from evm_rpc.constants import BlockTag
from evm_rpc.eth import EthClient
from evm_rpc.exceptions import (
    EmptyResponseError,
    MalformedHexError,
    RetriesExhaustedError,
    RPCError,
    ValidationError,
)

ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
TX_HASH = "0x" + "ab" * 32


def _client(handlers: dict[str, Any]) -> tuple[EthClient, FakeNode]:
    node = FakeNode(handlers)
    return EthClient.from_transports([node], retry_count=0), node


def _block(number: int = 100) -> dict[str, Any]:
    return {
        "number": hex(number),
        "hash": "0x" + "aa" * 32,
        "parentHash": "0x" + "bb" * 32,
        "timestamp": "0x6553f100",
        "gasLimit": "0x1c9c380",
        "gasUsed": "0x5208",
        "miner": "0x0000000000000000000000000000000000000000",
        "logsBloom": "0x" + "00" * 256,
        "transactions": [TX_HASH],
        "baseFeePerGas": "0x3b9aca00",
    }


class TestAccountMethods:
    def test_get_balance_defaults_to_latest(self):
        client, node = _client({"eth_getBalance": "0xDE0B6B3A7640000"})

        assert client.get_balance(ADDRESS.lower()) == 10**18
        assert node.calls == [("eth_getBalance", (ADDRESS, "latest"))]

    def test_get_balance_at_block_number(self):
        client, node = _client({"eth_getBalance": "0x0"})

        client.get_balance(ADDRESS, 1024)

        assert node.calls[0][1] == (ADDRESS, "0x400")

    def test_get_transaction_count_with_tag(self):
        client, node = _client({"eth_getTransactionCount": "0x7"})

        assert client.get_transaction_count(ADDRESS, BlockTag.PENDING) == 7
        assert node.calls[0][1] == (ADDRESS, "pending")

    def test_invalid_address_is_rejected_locally(self):
        client, node = _client({"eth_getBalance": "0x0"})

        with pytest.raises(ValidationError):
            client.get_balance("0x1234")

        assert node.calls == []

    def test_get_code(self):
        client, _ = _client({"eth_getCode": "0x6080"})
        assert client.get_code(ADDRESS) == b"\x60\x80"

    def test_get_storage_at_int_slot(self):
        client, node = _client({"eth_getStorageAt": "0x" + "00" * 31 + "2a"})

        value = client.get_storage_at(ADDRESS, 5, "finalized")

        assert int.from_bytes(value, "big") == 42
        assert node.calls[0][1] == (ADDRESS, "0x5", "finalized")

    def test_create_access_list(self):
        client, node = _client(
            {
                "eth_createAccessList": {
                    "accessList": [{"address": ADDRESS.lower(), "storageKeys": []}],
                    "gasUsed": "0x7530",
                }
            }
        )
        tx = {"from": ADDRESS, "to": ADDRESS, "data": "0x"}

        result = client.create_access_list(tx)

        assert result.gas_used == 30000
        assert result.access_list[0].address == ADDRESS
        assert node.calls[0][1] == (tx, "latest")

    def test_create_access_list_surfaces_execution_error(self):
        client, _ = _client(
            {
                "eth_createAccessList": {
                    "accessList": [],
                    "gasUsed": "0x5208",
                    "error": "execution reverted",
                }
            }
        )

        with pytest.raises(RPCError) as excinfo:
            client.create_access_list({"to": ADDRESS})

        assert excinfo.value.rpc_message == "execution reverted"
        assert excinfo.value.data == {"gasUsed": 21000}


class TestBlockMethods:
    def test_get_block_number(self):
        client, _ = _client({"eth_blockNumber": "0x1b4"})
        assert client.get_block_number() == 436

    def test_get_block_by_number(self):
        client, node = _client({"eth_getBlockByNumber": _block(7)})

        block = client.get_block_by_number(7)

        assert block.number == 7
        assert block.base_fee_per_gas == 10**9
        assert node.calls == [("eth_getBlockByNumber", ("0x7", False))]

    def test_get_block_by_number_defaults(self):
        client, node = _client({"eth_getBlockByNumber": _block()})

        client.get_block_by_number(full_transactions=True)

        assert node.calls[0][1] == ("latest", True)

    def test_unknown_block_is_empty(self):
        client, _ = _client({"eth_getBlockByNumber": None})

        with pytest.raises(EmptyResponseError):
            client.get_block_by_number(10**9)

    def test_get_block_by_hash_normalises_hash(self):
        client, node = _client({"eth_getBlockByHash": _block()})

        client.get_block_by_hash("0x" + "AA" * 32)

        assert node.calls[0][1] == ("0x" + "aa" * 32, False)

    def test_get_block_by_hash_rejects_short_hash(self):
        client, node = _client({"eth_getBlockByHash": _block()})

        with pytest.raises(ValidationError):
            client.get_block_by_hash("0xabc")
        assert node.calls == []

    def test_transaction_counts(self):
        client, node = _client(
            {
                "eth_getBlockTransactionCountByNumber": "0x3",
                "eth_getBlockTransactionCountByHash": "0x4",
            }
        )

        assert client.get_block_transaction_count_by_number(BlockTag.SAFE) == 3
        assert client.get_block_transaction_count_by_hash(TX_HASH) == 4
        assert node.calls[0][1] == ("safe",)

    def test_get_block_receipts(self):
        receipt = {
            "transactionHash": TX_HASH,
            "transactionIndex": "0x0",
            "blockHash": "0x" + "aa" * 32,
            "blockNumber": "0x64",
            "from": ADDRESS,
            "to": ADDRESS,
            "gasUsed": "0x5208",
            "cumulativeGasUsed": "0x5208",
            "logs": [],
            "logsBloom": "0x" + "00" * 256,
            "status": "0x1",
        }
        client, _ = _client({"eth_getBlockReceipts": [receipt]})

        (decoded,) = client.get_block_receipts(100)

        assert decoded.block_number == 100
        assert decoded.succeeded

    def test_fee_history(self):
        client, node = _client(
            {
                "eth_feeHistory": {
                    "oldestBlock": "0x62",
                    "baseFeePerGas": ["0x1", "0x2", "0x3"],
                    "gasUsedRatio": [0.4, 0.6],
                    "reward": [["0x1"], ["0x2"]],
                }
            }
        )

        history = client.fee_history(2, reward_percentiles=[50])

        assert history.oldest_block == 98
        assert history.reward == [[1], [2]]
        assert node.calls[0][1] == ("0x2", "latest", [50])

    def test_fee_history_requires_positive_count(self):
        client, _ = _client({})
        with pytest.raises(ValidationError):
            client.fee_history(0)


class TestChainMethods:
    def test_chain_reads(self):
        client, node = _client(
            {
                "eth_chainId": "0x1",
                "eth_gasPrice": "0x3b9aca00",
                "net_version": "1",
                "net_listening": True,
                "net_peerCount": "0x19",
                "web3_clientVersion": "Geth/v1.14.0",
            }
        )

        assert client.get_chain_id() == 1
        assert client.gas_price() == 10**9
        assert client.net_version() == "1"
        assert client.net_listening() is True
        assert client.net_peer_count() == 25
        assert client.client_version() == "Geth/v1.14.0"
        assert node.methods == [
            "eth_chainId",
            "eth_gasPrice",
            "net_version",
            "net_listening",
            "net_peerCount",
            "web3_clientVersion",
        ]


class TestTransactionMethods:
    def test_estimate_gas(self):
        client, node = _client({"eth_estimateGas": "0x5208"})
        call = {"from": ADDRESS, "to": ADDRESS, "value": "0x1"}

        assert client.estimate_gas(call) == 21000
        assert node.calls[0][1] == (call,)

    def test_call_returns_hex(self):
        client, node = _client({"eth_call": "0x" + "00" * 31 + "01"})

        assert client.call({"to": ADDRESS, "data": "0x06fdde03"}, 5).endswith("01")
        assert node.calls[0][1][1] == "0x5"

    def test_simulate_call_alias(self):
        client, _ = _client({"eth_call": "0x01"})
        assert client.simulate_call({"to": ADDRESS}) == "0x01"

    def test_call_without_return_data(self):
        client, _ = _client({"eth_call": "0x"})
        assert client.call({"to": ADDRESS, "data": "0x"}) == "0x"

    def test_call_rejects_non_hex(self):
        client, _ = _client({"eth_call": "not hex"})
        with pytest.raises(MalformedHexError):
            client.call({"to": ADDRESS})

    def test_send_raw_transaction(self):
        client, node = _client({"eth_sendRawTransaction": TX_HASH})

        tx_hash = client.send_raw_transaction(b"\x02\xf8")

        assert tx_hash.to_0x_hex() == TX_HASH
        assert node.calls[0][1] == ("0x02f8",)

    def test_send_raw_transaction_adds_prefix(self):
        client, node = _client({"eth_sendRawTransaction": TX_HASH})

        client.send_raw_transaction("02f8")

        assert node.calls[0][1] == ("0x02f8",)

    def test_get_transaction_by_hash_bytes(self):
        client, node = _client({"eth_getTransactionByHash": {"hash": TX_HASH, "nonce": "0x0"}})

        tx = client.get_transaction_by_hash(bytes.fromhex("ab" * 32))

        assert tx["nonce"] == "0x0"
        assert node.calls[0][1] == (TX_HASH,)

    def test_pending_receipt_is_empty(self):
        client, _ = _client({"eth_getTransactionReceipt": None})
        with pytest.raises(EmptyResponseError):
            client.get_transaction_receipt(TX_HASH)


class TestFallbackThroughWrappers:
    def test_wrapper_uses_backup_transport(self):
        primary = ScriptedTransport("primary", [SimulatedFailure("primary down")])
        backup = succeed("0x2a", "backup")
        client = EthClient.from_transports([primary, backup], retry_count=0)

        assert client.get_chain_id() == 42
        assert len(primary.calls) == 1

    def test_wrapper_propagates_exhaustion(self):
        client = EthClient.from_transports(
            [ScriptedTransport("down", [SimulatedFailure("down")])], retry_count=0
        )

        with pytest.raises(RetriesExhaustedError):
            client.get_block_number()

    def test_decode_error_is_not_retried(self):
        node = FakeNode({"eth_chainId": "0xzz"})
        client = EthClient.from_transports([node], retry_count=3)

        with pytest.raises(MalformedHexError):
            client.get_chain_id()

        assert node.methods == ["eth_chainId"]
