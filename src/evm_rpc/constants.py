"""JSON-RPC method names and block tags."""

from enum import Enum


class BlockTag(str, Enum):
    """Named block parameters accepted by the execution API."""

    EARLIEST = "earliest"  # Genesis block
    LATEST = "latest"
    SAFE = "safe"
    FINALIZED = "finalized"
    PENDING = "pending"


class ETHMethod(str, Enum):
    """``eth_*`` namespace methods."""

    # Blocks
    GET_BLOCK_BY_NUMBER = "eth_getBlockByNumber"
    GET_BLOCK_BY_HASH = "eth_getBlockByHash"
    BLOCK_NUMBER = "eth_blockNumber"
    GET_BLOCK_TRANSACTION_COUNT_BY_HASH = "eth_getBlockTransactionCountByHash"
    GET_BLOCK_TRANSACTION_COUNT_BY_NUMBER = "eth_getBlockTransactionCountByNumber"
    GET_BLOCK_RECEIPTS = "eth_getBlockReceipts"
    FEE_HISTORY = "eth_feeHistory"

    # Transactions
    GET_TRANSACTION_BY_HASH = "eth_getTransactionByHash"
    GET_TRANSACTION_RECEIPT = "eth_getTransactionReceipt"
    SEND_RAW_TRANSACTION = "eth_sendRawTransaction"

    # Accounts and contracts
    GET_BALANCE = "eth_getBalance"
    GET_TRANSACTION_COUNT = "eth_getTransactionCount"
    GET_CODE = "eth_getCode"
    GET_STORAGE_AT = "eth_getStorageAt"
    CALL = "eth_call"
    ESTIMATE_GAS = "eth_estimateGas"
    CREATE_ACCESS_LIST = "eth_createAccessList"

    # Chain state
    CHAIN_ID = "eth_chainId"
    GAS_PRICE = "eth_gasPrice"


class NetMethod(str, Enum):
    """``net_*`` namespace methods."""

    VERSION = "net_version"
    LISTENING = "net_listening"
    PEER_COUNT = "net_peerCount"


class Web3Method(str, Enum):
    """``web3_*`` namespace methods."""

    CLIENT_VERSION = "web3_clientVersion"


DEFAULT_BLOCK_TAG = BlockTag.LATEST

# Error(string) selector used by Solidity reverts
REVERT_REASON_SELECTOR = bytes.fromhex("08c379a0")


def method_name(method: str | Enum) -> str:
    """Return the wire name for a method token.

    Args:
        method: Plain string or a ``str`` enum member

    Returns:
        Method name as sent on the wire
    """
    if isinstance(method, Enum):
        return str(method.value)
    return method
