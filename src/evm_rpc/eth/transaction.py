"""Transaction wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hexbytes import HexBytes

from .. import transfer
from ..constants import BlockTag, ETHMethod
from ..context import RequestContext
from ..exceptions import DecodeError, ValidationError
from ..types import TransactionReceipt
from ..utils import normalise_block, parse_hash
from .base import MethodsBase


class TransactionMethods(MethodsBase):
    def estimate_gas(
        self, call: Mapping[str, Any], *, context: RequestContext | None = None
    ) -> int:
        return transfer.to_uint64(self._request(ETHMethod.ESTIMATE_GAS, dict(call), context=context))

    def call(
        self,
        call: Mapping[str, Any],
        block: int | str | BlockTag | None = None,
        *,
        context: RequestContext | None = None,
    ) -> str:
        """Execute ``call`` without a transaction and return the ``0x`` result data.

        A call that returns nothing yields ``"0x"``.
        """
        raw = self._request(ETHMethod.CALL, dict(call), normalise_block(block), context=context)
        return transfer.to_bytes(raw).to_0x_hex()

    simulate_call = call

    def send_raw_transaction(
        self, raw_transaction: bytes | str, *, context: RequestContext | None = None
    ) -> HexBytes:
        """Broadcast a signed transaction and return its hash."""
        if isinstance(raw_transaction, str):
            payload = raw_transaction if raw_transaction.startswith("0x") else f"0x{raw_transaction}"
        else:
            payload = HexBytes(raw_transaction).to_0x_hex()

        raw = self._request(ETHMethod.SEND_RAW_TRANSACTION, payload, context=context)
        return transfer.to_hash(raw)

    def get_transaction_by_hash(
        self, tx_hash: str | bytes, *, context: RequestContext | None = None
    ) -> dict[str, Any]:
        raw = self._request(ETHMethod.GET_TRANSACTION_BY_HASH, _tx_hash(tx_hash), context=context)
        return transfer.to_object(raw)

    def get_transaction_receipt(
        self, tx_hash: str | bytes, *, context: RequestContext | None = None
    ) -> TransactionReceipt:
        """Receipt for ``tx_hash``.

        Raises:
            EmptyResponseError: If the transaction is unknown or still pending
        """
        raw = self._request(ETHMethod.GET_TRANSACTION_RECEIPT, _tx_hash(tx_hash), context=context)
        return transfer.to_receipt(raw)


def _tx_hash(tx_hash: str | bytes) -> str:
    if isinstance(tx_hash, bytes | bytearray):
        tx_hash = HexBytes(tx_hash).to_0x_hex()
    try:
        return parse_hash(tx_hash, field="tx_hash").to_0x_hex()
    except DecodeError as exc:
        raise ValidationError("Invalid transaction hash", field="tx_hash", value=tx_hash) from exc
