"""Typed JSON-RPC client for Ethereum-compatible nodes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..client.config import DispatchConfig
from ..client.dispatch import DispatchClient
from ..transport import Transport
from .account import AccountMethods
from .block import BlockMethods
from .chain import ChainMethods
from .transaction import TransactionMethods


class EthClient(AccountMethods, BlockMethods, ChainMethods, TransactionMethods):
    """One method per JSON-RPC call, decoded into Python values.

    Wrappers only build parameters and decode results; retries and
    fallback happen in the wrapped :class:`DispatchClient`.
    """

    @classmethod
    def from_transports(cls, transports: Iterable[Transport], **options: Any) -> EthClient:
        return cls(DispatchClient(*transports, **options))

    @classmethod
    def from_config(cls, config: DispatchConfig) -> EthClient:
        return cls(DispatchClient.from_config(config))

    def close(self) -> None:
        self._dispatcher.close()

    def __enter__(self) -> EthClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
