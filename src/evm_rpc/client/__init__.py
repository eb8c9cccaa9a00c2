"""Dispatch and wallet clients."""

from .config import (
    DEFAULT_POLLING_INTERVAL,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    DispatchConfig,
)
from .dispatch import DispatchClient
from .wallet import WalletClient

__all__ = [
    "DEFAULT_POLLING_INTERVAL",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_TIMEOUT",
    "DispatchClient",
    "DispatchConfig",
    "WalletClient",
]
