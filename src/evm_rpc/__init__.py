"""EVM JSON-RPC client - fallback dispatch across HTTP, WebSocket and IPC.

This library sends JSON-RPC calls to Ethereum-compatible nodes through an
ordered list of transports with retry, fallback and deadline handling, and
decodes the results into Python values.
"""

from .access_list import AccessListBuilder
from .client import DispatchClient, DispatchConfig, WalletClient
from .constants import BlockTag, ETHMethod, NetMethod, Web3Method
from .context import RequestContext
from .eth import EthClient
from .exceptions import (
    ConfigurationError,
    ContextError,
    DecodeError,
    DeadlineExceededError,
    EmptyResponseError,
    FieldMismatchError,
    MalformedHexError,
    RequestCancelledError,
    RetriesExhaustedError,
    RPCClientError,
    RPCError,
    TransportError,
    ValidationError,
    WalletError,
)
from .transport import (
    HTTPTransport,
    IPCTransport,
    Transport,
    WebSocketTransport,
    transport_from_url,
)
from .types import (
    AccessListResult,
    AccessTuple,
    Block,
    FeeHistory,
    RawResponse,
    TransactionReceipt,
)
from .utils import (
    build_calldata,
    normalise_block,
    parse_hex_quantity,
    revert_reason,
    to_hex_quantity,
    typed_data_hash,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "DispatchClient",
    "DispatchConfig",
    "EthClient",
    "WalletClient",
    "RequestContext",
    # Transports
    "Transport",
    "HTTPTransport",
    "WebSocketTransport",
    "IPCTransport",
    "transport_from_url",
    # Types and enums
    "BlockTag",
    "ETHMethod",
    "NetMethod",
    "Web3Method",
    "AccessListBuilder",
    "AccessListResult",
    "AccessTuple",
    "Block",
    "FeeHistory",
    "RawResponse",
    "TransactionReceipt",
    # Exceptions
    "RPCClientError",
    "ConfigurationError",
    "ContextError",
    "DeadlineExceededError",
    "RequestCancelledError",
    "TransportError",
    "RPCError",
    "RetriesExhaustedError",
    "DecodeError",
    "EmptyResponseError",
    "MalformedHexError",
    "FieldMismatchError",
    "ValidationError",
    "WalletError",
    # Utility functions
    "build_calldata",
    "normalise_block",
    "parse_hex_quantity",
    "revert_reason",
    "to_hex_quantity",
    "typed_data_hash",
]
