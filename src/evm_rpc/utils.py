"""Hex, ABI and signing helpers for the EVM JSON-RPC client."""

import json
import re
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from eth_abi import decode as abi_decode
from eth_account.messages import SignableMessage, encode_typed_data
from eth_typing import ChecksumAddress, HexStr
from eth_utils import keccak
from hexbytes import HexBytes
from web3 import Web3

from .constants import DEFAULT_BLOCK_TAG, REVERT_REASON_SELECTOR, BlockTag
from .exceptions import FieldMismatchError, MalformedHexError, ValidationError

UINT64_MAX = 2**64 - 1
HASH_LENGTH = 32

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def to_hex_quantity(value: int) -> str:
    """Encode a non-negative integer as a JSON-RPC quantity (``0x``-prefixed, no padding)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Quantity must be an integer", field="value", value=value)
    if value < 0:
        raise ValidationError("Quantity cannot be negative", field="value", value=value)
    return hex(value)


def parse_hex_quantity(value: Any, field: str | None = None) -> int:
    """Decode a JSON-RPC quantity string into an int."""
    if not isinstance(value, str):
        raise FieldMismatchError("Expected a hex quantity string", field=field, value=value)

    if not value[:2].lower() == "0x" or not _HEX_DIGITS.fullmatch(value[2:]):
        raise MalformedHexError(f"Invalid hex quantity: {value!r}", field=field, value=value)

    return int(value[2:], 16)


def parse_hex_uint64(value: Any, field: str | None = None) -> int:
    """Decode a quantity that must fit in 64 bits."""
    result = parse_hex_quantity(value, field)
    if result > UINT64_MAX:
        raise FieldMismatchError("Quantity exceeds uint64 maximum", field=field, value=value)
    return result


def parse_hex_data(value: Any, field: str | None = None) -> HexBytes:
    """Decode ``0x``-prefixed hex data (``"0x"`` is empty data)."""
    if not isinstance(value, str):
        raise FieldMismatchError("Expected hex data string", field=field, value=value)
    if not value[:2].lower() == "0x":
        raise MalformedHexError(f"Hex data must start with 0x: {value!r}", field=field, value=value)

    try:
        return HexBytes(value)
    except ValueError:
        raise MalformedHexError(f"Invalid hex data: {value!r}", field=field, value=value)


def parse_hash(value: Any, field: str | None = None) -> HexBytes:
    """Decode a 32-byte hash."""
    data = parse_hex_data(value, field)
    if len(data) != HASH_LENGTH:
        raise MalformedHexError(
            f"Hash must be {HASH_LENGTH} bytes, got {len(data)}", field=field, value=value
        )
    return data


def parse_address(value: Any, field: str | None = None) -> ChecksumAddress:
    """Decode an address into its checksummed form."""
    if not isinstance(value, str):
        raise FieldMismatchError("Expected an address string", field=field, value=value)
    if not value[:2].lower() == "0x":
        raise MalformedHexError(f"Address must start with 0x: {value!r}", field=field, value=value)

    try:
        return Web3.to_checksum_address(value)
    except ValueError:
        raise MalformedHexError(f"Invalid address: {value!r}", field=field, value=value)


def normalise_block(block: int | str | BlockTag | None) -> str:
    """Return the wire form of a block number or tag, defaulting to ``latest``."""
    if block is None or block == "":
        return DEFAULT_BLOCK_TAG.value

    if isinstance(block, Enum):
        return str(block.value)

    if isinstance(block, int) and not isinstance(block, bool):
        return to_hex_quantity(block)

    if isinstance(block, str):
        if block in {tag.value for tag in BlockTag}:
            return block
        parse_hex_quantity(block, field="block")
        return block

    raise ValidationError("Block must be a number, hex quantity or tag", field="block", value=block)


def revert_reason(data: str | bytes) -> str:
    """Decode the message of an ``Error(string)`` revert payload.

    Args:
        data: Revert data as hex string or bytes

    Returns:
        The revert message

    Raises:
        ValidationError: If the payload is not an ``Error(string)`` revert
    """
    try:
        raw = bytes(HexBytes(data))
    except ValueError as exc:
        raise ValidationError("Revert data is not valid hex", field="data", value=data) from exc

    if len(raw) < 4 or raw[:4] != REVERT_REASON_SELECTOR:
        raise ValidationError("Not an Error(string) revert payload", field="data", value=data)

    try:
        (reason,) = abi_decode(["string"], raw[4:])
    except Exception as exc:
        raise ValidationError(
            "Invalid revert reason encoding",
            field="data",
            value=data,
            details={"error": str(exc)},
        ) from exc

    return reason


def build_calldata(
    abi: str | Sequence[Mapping[str, Any]], function_name: str, *args: Any
) -> HexBytes:
    """ABI-encode a call to ``function_name`` (selector followed by arguments)."""
    abi_entries = json.loads(abi) if isinstance(abi, str) else list(abi)

    try:
        contract = Web3().eth.contract(abi=abi_entries)
        encoded = contract.encode_abi(function_name, args=list(args))
    except Exception as exc:
        raise ValidationError(
            f"Failed to encode calldata for {function_name}",
            field="function_name",
            value=function_name,
            details={"error": str(exc)},
        ) from exc

    return HexBytes(HexStr(encoded))


def encode_typed_message(typed_data: str | Mapping[str, Any]) -> SignableMessage:
    """Encode an EIP-712 document (JSON text or dict) as a signable message."""
    if isinstance(typed_data, str):
        try:
            typed_data = json.loads(typed_data)
        except json.JSONDecodeError as exc:
            raise ValidationError(
                "Invalid typed data JSON", field="typed_data", details={"error": str(exc)}
            ) from exc

    try:
        signable = encode_typed_data(full_message=dict(typed_data))
    except Exception as exc:
        raise ValidationError(
            "Failed to encode typed data", field="typed_data", details={"error": str(exc)}
        ) from exc

    return signable


def typed_data_hash(typed_data: str | Mapping[str, Any]) -> HexBytes:
    """Return the EIP-712 digest ``keccak(0x1901 || domainSeparator || hashStruct(message))``."""
    signable = encode_typed_message(typed_data)
    return HexBytes(keccak(b"\x19" + signable.version + signable.header + signable.body))
