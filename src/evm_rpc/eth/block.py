"""Block wrappers."""

from __future__ import annotations

from collections.abc import Sequence

from .. import transfer
from ..constants import BlockTag, ETHMethod
from ..context import RequestContext
from ..exceptions import DecodeError, ValidationError
from ..types import Block, FeeHistory, TransactionReceipt
from ..utils import normalise_block, parse_hash, to_hex_quantity
from .base import MethodsBase


class BlockMethods(MethodsBase):
    def get_block_number(self, *, context: RequestContext | None = None) -> int:
        return transfer.to_int(self._request(ETHMethod.BLOCK_NUMBER, context=context))

    def get_block_by_number(
        self,
        block: int | str | BlockTag | None = None,
        full_transactions: bool = False,
        *,
        context: RequestContext | None = None,
    ) -> Block:
        """Fetch a block by number or tag.

        Raises:
            EmptyResponseError: If the node does not know the block
        """
        raw = self._request(
            ETHMethod.GET_BLOCK_BY_NUMBER,
            normalise_block(block),
            full_transactions,
            context=context,
        )
        return transfer.to_block(raw)

    def get_block_by_hash(
        self,
        block_hash: str,
        full_transactions: bool = False,
        *,
        context: RequestContext | None = None,
    ) -> Block:
        raw = self._request(
            ETHMethod.GET_BLOCK_BY_HASH, _block_hash(block_hash), full_transactions, context=context
        )
        return transfer.to_block(raw)

    def get_block_transaction_count_by_number(
        self, block: int | str | BlockTag | None = None, *, context: RequestContext | None = None
    ) -> int:
        raw = self._request(
            ETHMethod.GET_BLOCK_TRANSACTION_COUNT_BY_NUMBER, normalise_block(block), context=context
        )
        return transfer.to_uint64(raw)

    def get_block_transaction_count_by_hash(
        self, block_hash: str, *, context: RequestContext | None = None
    ) -> int:
        raw = self._request(
            ETHMethod.GET_BLOCK_TRANSACTION_COUNT_BY_HASH, _block_hash(block_hash), context=context
        )
        return transfer.to_uint64(raw)

    def get_block_receipts(
        self, block: int | str | BlockTag | None = None, *, context: RequestContext | None = None
    ) -> list[TransactionReceipt]:
        raw = self._request(ETHMethod.GET_BLOCK_RECEIPTS, normalise_block(block), context=context)
        return transfer.to_struct_list(raw, TransactionReceipt)

    def fee_history(
        self,
        block_count: int,
        newest_block: int | str | BlockTag | None = None,
        reward_percentiles: Sequence[float] = (),
        *,
        context: RequestContext | None = None,
    ) -> FeeHistory:
        if block_count <= 0:
            raise ValidationError(
                "Block count must be positive", field="block_count", value=block_count
            )

        raw = self._request(
            ETHMethod.FEE_HISTORY,
            to_hex_quantity(block_count),
            normalise_block(newest_block),
            list(reward_percentiles),
            context=context,
        )
        return transfer.to_struct(raw, FeeHistory)


def _block_hash(block_hash: str) -> str:
    try:
        return parse_hash(block_hash, field="block_hash").to_0x_hex()
    except DecodeError as exc:
        raise ValidationError("Invalid block hash", field="block_hash", value=block_hash) from exc
