"""JSON-RPC method wrappers."""

from .client import EthClient

__all__ = ["EthClient"]
