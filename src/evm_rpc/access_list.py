"""Incremental builder for EIP-2930 access lists."""

from __future__ import annotations

from typing import Any

from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from .exceptions import DecodeError, ValidationError
from .types import AccessTuple, access_list_to_rpc
from .utils import HASH_LENGTH, parse_address


class AccessListBuilder:
    """Collect addresses and storage slots, de-duplicating both.

    Entries come out in the order addresses were first added.
    """

    def __init__(self) -> None:
        self._entries: dict[ChecksumAddress, dict[HexBytes, None]] = {}

    def add(self, address: str, storage_key: str | bytes | int) -> AccessListBuilder:
        slots = self._slots_for(address)
        slots[_storage_key(storage_key)] = None
        return self

    def add_address_only(self, address: str) -> AccessListBuilder:
        self._slots_for(address)
        return self

    def build(self) -> list[AccessTuple]:
        return [
            AccessTuple(address=address, storage_keys=list(slots))
            for address, slots in self._entries.items()
        ]

    def as_rpc(self) -> list[dict[str, Any]]:
        return access_list_to_rpc(self.build())

    def __len__(self) -> int:
        return len(self._entries)

    def _slots_for(self, address: str) -> dict[HexBytes, None]:
        try:
            checksum = parse_address(address, field="address")
        except DecodeError as exc:
            raise ValidationError(str(exc), field="address", value=address) from exc
        return self._entries.setdefault(checksum, {})


def _storage_key(value: str | bytes | int) -> HexBytes:
    """Left-pad a storage key to 32 bytes."""
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0 or value >= 2 ** (8 * HASH_LENGTH):
            raise ValidationError("Storage key out of range", field="storage_key", value=value)
        return HexBytes(value.to_bytes(HASH_LENGTH, "big"))

    try:
        data = bytes(HexBytes(value))
    except (TypeError, ValueError) as exc:
        raise ValidationError("Storage key is not valid hex", field="storage_key", value=value) from exc

    if len(data) > HASH_LENGTH:
        raise ValidationError("Storage key longer than 32 bytes", field="storage_key", value=value)
    return HexBytes(data.rjust(HASH_LENGTH, b"\x00"))
