"""Typed response models decoded from JSON-RPC results."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, TypeVar

from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from .exceptions import FieldMismatchError
from .utils import parse_address, parse_hash, parse_hex_data, parse_hex_quantity

RawResponse = bytes  # JSON encoding of a JSON-RPC result, undecoded

Decoder = Callable[[Any, str], Any]


def rpc_field(key: str, decoder: Decoder | None = None, *, optional: bool = False) -> Any:
    """Declare a dataclass field read from JSON key ``key`` through ``decoder``.

    Optional fields default to ``None`` when absent or null.
    """
    metadata = {"rpc_key": key, "decoder": decoder, "optional": optional}
    if optional:
        return field(default=None, metadata=metadata)
    return field(metadata=metadata)


def _passthrough(value: Any, key: str) -> Any:
    return value


def _list_of(decoder: Decoder) -> Decoder:
    def decode(value: Any, key: str) -> list[Any]:
        if not isinstance(value, list):
            raise FieldMismatchError("Expected a JSON array", field=key, value=value)
        return [decoder(item, key) for item in value]

    return decode


def _nested_list_of(decoder: Decoder) -> Decoder:
    return _list_of(_list_of(decoder))


T = TypeVar("T")


def decode_struct(value: Any, cls: type[T], path: str | None = None) -> T:
    """Build dataclass ``cls`` from a decoded JSON object using its ``rpc_field`` metadata.

    Fields declared without ``rpc_field`` are read from a key equal to their
    name and passed through unchanged.
    """
    if not is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass")
    if not isinstance(value, Mapping):
        raise FieldMismatchError(
            f"Expected a JSON object for {cls.__name__}", field=path, value=value
        )

    kwargs: dict[str, Any] = {}
    for item in fields(cls):
        key = item.metadata.get("rpc_key", item.name)
        decoder = item.metadata.get("decoder") or _passthrough
        optional = item.metadata.get("optional", False)
        qualified = f"{path}.{key}" if path else key

        raw = value.get(key)
        if raw is None:
            if optional:
                kwargs[item.name] = None
                continue
            raise FieldMismatchError(
                f"Missing field {key!r} for {cls.__name__}", field=qualified, value=value
            )

        kwargs[item.name] = decoder(raw, qualified)

    return cls(**kwargs)


@dataclass(frozen=True)
class AccessTuple:
    """One access-list entry: an address and the storage slots it touches."""

    address: ChecksumAddress = rpc_field("address", parse_address)
    storage_keys: list[HexBytes] = rpc_field("storageKeys", _list_of(parse_hash))

    def as_rpc(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "storageKeys": [key.to_0x_hex() for key in self.storage_keys],
        }


def _access_tuple(value: Any, key: str) -> AccessTuple:
    return decode_struct(value, AccessTuple, path=key)


@dataclass(frozen=True)
class AccessListResult:
    """Result of ``eth_createAccessList``."""

    access_list: list[AccessTuple] = rpc_field("accessList", _list_of(_access_tuple))
    gas_used: int = rpc_field("gasUsed", parse_hex_quantity)
    error: str | None = rpc_field("error", optional=True)


@dataclass(frozen=True)
class Block:
    """Subset of block header fields plus the transaction list."""

    number: int = rpc_field("number", parse_hex_quantity)
    hash: HexBytes = rpc_field("hash", parse_hash)
    parent_hash: HexBytes = rpc_field("parentHash", parse_hash)
    timestamp: int = rpc_field("timestamp", parse_hex_quantity)
    gas_limit: int = rpc_field("gasLimit", parse_hex_quantity)
    gas_used: int = rpc_field("gasUsed", parse_hex_quantity)
    miner: ChecksumAddress = rpc_field("miner", parse_address)
    logs_bloom: HexBytes = rpc_field("logsBloom", parse_hex_data)
    transactions: list[Any] = rpc_field("transactions", _passthrough)
    base_fee_per_gas: int | None = rpc_field("baseFeePerGas", parse_hex_quantity, optional=True)
    state_root: HexBytes | None = rpc_field("stateRoot", parse_hash, optional=True)
    extra_data: HexBytes | None = rpc_field("extraData", parse_hex_data, optional=True)

    @property
    def transaction_hashes(self) -> list[str]:
        """Transaction hashes whether the block was fetched with full objects or not."""
        return [tx["hash"] if isinstance(tx, dict) else tx for tx in self.transactions]


@dataclass(frozen=True)
class TransactionReceipt:
    """Receipt of a mined transaction."""

    transaction_hash: HexBytes = rpc_field("transactionHash", parse_hash)
    transaction_index: int = rpc_field("transactionIndex", parse_hex_quantity)
    block_hash: HexBytes = rpc_field("blockHash", parse_hash)
    block_number: int = rpc_field("blockNumber", parse_hex_quantity)
    from_address: ChecksumAddress = rpc_field("from", parse_address)
    gas_used: int = rpc_field("gasUsed", parse_hex_quantity)
    cumulative_gas_used: int = rpc_field("cumulativeGasUsed", parse_hex_quantity)
    logs: list[dict[str, Any]] = rpc_field("logs", _passthrough)
    logs_bloom: HexBytes = rpc_field("logsBloom", parse_hex_data)
    to_address: ChecksumAddress | None = rpc_field("to", parse_address, optional=True)
    contract_address: ChecksumAddress | None = rpc_field(
        "contractAddress", parse_address, optional=True
    )
    status: int | None = rpc_field("status", parse_hex_quantity, optional=True)
    effective_gas_price: int | None = rpc_field(
        "effectiveGasPrice", parse_hex_quantity, optional=True
    )
    type: int | None = rpc_field("type", parse_hex_quantity, optional=True)

    @property
    def succeeded(self) -> bool:
        return self.status == 1


@dataclass(frozen=True)
class FeeHistory:
    """Result of ``eth_feeHistory``."""

    oldest_block: int = rpc_field("oldestBlock", parse_hex_quantity)
    base_fee_per_gas: list[int] = rpc_field("baseFeePerGas", _list_of(parse_hex_quantity))
    gas_used_ratio: list[float] = rpc_field("gasUsedRatio", _passthrough)
    reward: list[list[int]] | None = rpc_field(
        "reward", _nested_list_of(parse_hex_quantity), optional=True
    )


def access_list_to_rpc(entries: Sequence[AccessTuple]) -> list[dict[str, Any]]:
    return [entry.as_rpc() for entry in entries]
