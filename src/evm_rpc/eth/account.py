"""Account and contract state wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hexbytes import HexBytes

from .. import transfer
from ..constants import BlockTag, ETHMethod
from ..context import RequestContext
from ..exceptions import DecodeError, RPCError, ValidationError
from ..types import AccessListResult
from ..utils import normalise_block, parse_address, to_hex_quantity
from .base import MethodsBase

BlockId = int | str | BlockTag | None


class AccountMethods(MethodsBase):
    def get_balance(
        self, address: str, block: BlockId = None, *, context: RequestContext | None = None
    ) -> int:
        """Balance of ``address`` in wei, at ``block`` (default ``latest``)."""
        raw = self._request(
            ETHMethod.GET_BALANCE, _address(address), normalise_block(block), context=context
        )
        return transfer.to_int(raw)

    def get_transaction_count(
        self, address: str, block: BlockId = None, *, context: RequestContext | None = None
    ) -> int:
        raw = self._request(
            ETHMethod.GET_TRANSACTION_COUNT,
            _address(address),
            normalise_block(block),
            context=context,
        )
        return transfer.to_uint64(raw)

    def get_code(
        self, address: str, block: BlockId = None, *, context: RequestContext | None = None
    ) -> HexBytes:
        raw = self._request(
            ETHMethod.GET_CODE, _address(address), normalise_block(block), context=context
        )
        return transfer.to_bytes(raw)

    def get_storage_at(
        self,
        address: str,
        slot: int | str,
        block: BlockId = None,
        *,
        context: RequestContext | None = None,
    ) -> HexBytes:
        position = to_hex_quantity(slot) if isinstance(slot, int) else slot
        raw = self._request(
            ETHMethod.GET_STORAGE_AT,
            _address(address),
            position,
            normalise_block(block),
            context=context,
        )
        return transfer.to_bytes(raw)

    def create_access_list(
        self,
        transaction: Mapping[str, Any],
        block: BlockId = None,
        *,
        context: RequestContext | None = None,
    ) -> AccessListResult:
        """Ask the node which addresses and slots ``transaction`` touches.

        Raises:
            RPCError: If the node reports an execution error in the result
        """
        raw = self._request(
            ETHMethod.CREATE_ACCESS_LIST, dict(transaction), normalise_block(block), context=context
        )
        result = transfer.to_struct(raw, AccessListResult)
        if result.error:
            raise RPCError(None, result.error, data={"gasUsed": result.gas_used})
        return result


def _address(address: str) -> str:
    try:
        return parse_address(address, field="address")
    except DecodeError as exc:
        raise ValidationError("Invalid address", field="address", value=address) from exc
