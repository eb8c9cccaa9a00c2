"""Signing client that builds, signs and broadcasts transactions."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, cast

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from ..constants import BlockTag
from ..context import RequestContext
from ..exceptions import ConfigurationError, DecodeError, ValidationError, WalletError
from ..types import AccessTuple, access_list_to_rpc
from ..utils import encode_typed_message, parse_address

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..eth.client import EthClient

logger = logging.getLogger(__name__)

DYNAMIC_FEE_TX_TYPE = 2


class WalletClient:
    """Send EIP-1559 transactions and sign messages with a local key.

    Chain reads (nonce, chain id) and the broadcast go through ``eth``, so
    they inherit its fallback and retry behaviour.
    """

    def __init__(self, eth: EthClient, private_key: str) -> None:
        try:
            signer = cast(LocalAccount, Account.from_key(private_key))
        except Exception as exc:
            raise ConfigurationError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc

        self._eth = eth
        self._account = signer
        logger.info("Wallet client ready for %s", signer.address)

    @property
    def address(self) -> ChecksumAddress:
        return self._account.address

    @property
    def account(self) -> LocalAccount:
        return self._account

    # ------------------------------------------------------------------
    # Chain reads
    # ------------------------------------------------------------------
    def get_nonce(self, *, context: RequestContext | None = None) -> int:
        return self._eth.get_transaction_count(self.address, BlockTag.PENDING, context=context)

    def get_chain_id(self, *, context: RequestContext | None = None) -> int:
        return self._eth.get_chain_id(context=context)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def send_eth(
        self,
        to: str,
        amount: int,
        gas_limit: int,
        max_fee_per_gas: int,
        max_priority_fee_per_gas: int,
        *,
        context: RequestContext | None = None,
    ) -> HexBytes:
        """Transfer ``amount`` wei to ``to`` and return the transaction hash."""
        return self.send_eth_1559(
            to,
            amount,
            max_fee_per_gas,
            max_priority_fee_per_gas,
            gas_limit,
            context=context,
        )

    def send_eth_1559(
        self,
        to: str,
        amount: int,
        max_fee_per_gas: int,
        max_priority_fee_per_gas: int,
        gas_limit: int,
        access_list: Sequence[AccessTuple] | Sequence[Mapping[str, Any]] | None = None,
        *,
        data: bytes | str = b"",
        context: RequestContext | None = None,
    ) -> HexBytes:
        """Build, sign and broadcast a type-2 transaction.

        Returns:
            Hash reported by the node for the broadcast transaction
        """
        tx = self.build_transaction(
            to,
            amount,
            max_fee_per_gas,
            max_priority_fee_per_gas,
            gas_limit,
            access_list,
            data=data,
            context=context,
        )
        raw_tx = self.sign_transaction(tx)

        tx_hash = self._eth.send_raw_transaction(raw_tx, context=context)
        logger.info(
            "Transaction sent from=%s nonce=%s hash=%s",
            self.address,
            tx["nonce"],
            tx_hash.to_0x_hex(),
        )
        return tx_hash

    def build_transaction(
        self,
        to: str,
        amount: int,
        max_fee_per_gas: int,
        max_priority_fee_per_gas: int,
        gas_limit: int,
        access_list: Sequence[AccessTuple] | Sequence[Mapping[str, Any]] | None = None,
        *,
        data: bytes | str = b"",
        context: RequestContext | None = None,
    ) -> dict[str, Any]:
        """Return an unsigned type-2 transaction dict with nonce and chain id filled in."""
        recipient = _recipient(to)
        for name, value in (
            ("amount", amount),
            ("gas_limit", gas_limit),
            ("max_fee_per_gas", max_fee_per_gas),
            ("max_priority_fee_per_gas", max_priority_fee_per_gas),
        ):
            if value < 0:
                raise ValidationError(f"{name} cannot be negative", field=name, value=value)
        if max_priority_fee_per_gas > max_fee_per_gas:
            raise ValidationError(
                "max_priority_fee_per_gas cannot exceed max_fee_per_gas",
                field="max_priority_fee_per_gas",
                value=max_priority_fee_per_gas,
            )

        nonce = self.get_nonce(context=context)
        chain_id = self.get_chain_id(context=context)

        return {
            "type": DYNAMIC_FEE_TX_TYPE,
            "chainId": chain_id,
            "nonce": nonce,
            "to": recipient,
            "value": amount,
            "gas": gas_limit,
            "maxFeePerGas": max_fee_per_gas,
            "maxPriorityFeePerGas": max_priority_fee_per_gas,
            "data": HexBytes(data),
            "accessList": _access_list(access_list),
        }

    def sign_transaction(self, tx: Mapping[str, Any]) -> HexBytes:
        try:
            signed = self._account.sign_transaction(dict(tx))
        except Exception as exc:
            raise WalletError("Failed to sign transaction", details={"error": str(exc)}) from exc
        return HexBytes(signed.raw_transaction)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def sign_message(self, message: bytes | str) -> HexBytes:
        """EIP-191 ``personal_sign`` signature (65 bytes, ``v`` in {27, 28})."""
        if isinstance(message, str):
            signable = encode_defunct(text=message)
        else:
            signable = encode_defunct(primitive=bytes(message))
        return HexBytes(self._account.sign_message(signable).signature)

    def sign_typed_data(self, typed_data: str | Mapping[str, Any]) -> HexBytes:
        """EIP-712 signature over a typed-data document (JSON text or dict)."""
        signable = encode_typed_message(typed_data)
        return HexBytes(self._account.sign_message(signable).signature)


def _recipient(to: str) -> ChecksumAddress:
    try:
        return parse_address(to, field="to")
    except DecodeError as exc:
        raise ValidationError("Invalid recipient address", field="to", value=to) from exc


def _access_list(
    entries: Sequence[AccessTuple] | Sequence[Mapping[str, Any]] | None,
) -> list[dict[str, Any]]:
    if not entries:
        return []
    if all(isinstance(entry, AccessTuple) for entry in entries):
        return access_list_to_rpc(cast(Sequence[AccessTuple], entries))
    return [dict(cast(Mapping[str, Any], entry)) for entry in entries]
