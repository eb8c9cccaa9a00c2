"""Decode raw JSON-RPC results into typed values.

Every function takes the raw bytes returned by the dispatch client. Errors
are split by cause so callers can tell a null or empty answer
(:class:`EmptyResponseError`) from corrupt hex (:class:`MalformedHexError`)
and from a value of the wrong shape (:class:`FieldMismatchError`).
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from .exceptions import EmptyResponseError, FieldMismatchError, MalformedHexError
from .types import Block, TransactionReceipt, decode_struct
from .utils import (
    parse_address,
    parse_hash,
    parse_hex_data,
    parse_hex_quantity,
    parse_hex_uint64,
)

T = TypeVar("T")


def load(raw: bytes | str | None) -> Any:
    """Parse raw bytes as JSON, rejecting empty payloads and ``null``."""
    if raw is None or len(raw) == 0:
        raise EmptyResponseError("empty response data")

    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise FieldMismatchError(
            "Response is not valid JSON",
            value=raw,
            details={"error": str(exc)},
        ) from exc

    if value is None:
        raise EmptyResponseError("received null response")
    return value


def to_int(raw: bytes) -> int:
    """Decode a hex quantity of arbitrary size."""
    return parse_hex_quantity(load(raw))


def to_uint64(raw: bytes) -> int:
    return parse_hex_uint64(load(raw))


def to_str(raw: bytes) -> str:
    """Decode a JSON string; a bare ``0x`` is rejected as malformed hex."""
    value = load(raw)
    if not isinstance(value, str):
        raise FieldMismatchError("Expected a string response", value=value)
    if value[:2].lower() == "0x" and len(value) < 3:
        raise MalformedHexError(f"Invalid hex string: {value}", value=value)
    return value


def to_hex_str(raw: bytes) -> str:
    """Decode a string that must be ``0x``-prefixed hex data."""
    value = to_str(raw)
    parse_hex_data(value)
    return value


def to_bytes(raw: bytes) -> HexBytes:
    return parse_hex_data(load(raw))


def to_bool(raw: bytes) -> bool:
    value = load(raw)
    if not isinstance(value, bool):
        raise FieldMismatchError("Expected a boolean response", value=value)
    return value


def to_address(raw: bytes) -> ChecksumAddress:
    return parse_address(load(raw))


def to_hash(raw: bytes) -> HexBytes:
    return parse_hash(load(raw))


def to_object(raw: bytes) -> dict[str, Any]:
    value = load(raw)
    if not isinstance(value, dict):
        raise FieldMismatchError("Expected a JSON object response", value=value)
    return value


def to_struct(raw: bytes, cls: type[T]) -> T:
    """Decode a JSON object into dataclass ``cls`` (see :func:`evm_rpc.types.rpc_field`)."""
    return decode_struct(load(raw), cls)


def to_struct_list(raw: bytes, cls: type[T]) -> list[T]:
    value = load(raw)
    if not isinstance(value, list):
        raise FieldMismatchError("Expected a JSON array response", value=value)
    return [decode_struct(item, cls, path=f"[{index}]") for index, item in enumerate(value)]


def to_receipt(raw: bytes) -> TransactionReceipt:
    return to_struct(raw, TransactionReceipt)


def to_block(raw: bytes) -> Block:
    return to_struct(raw, Block)
