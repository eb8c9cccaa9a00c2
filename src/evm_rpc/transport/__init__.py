"""JSON-RPC transports."""

from __future__ import annotations

from pathlib import Path

from .base import Transport, extract_result
from .http import HTTPTransport
from .ipc import IPCTransport
from .provider import ProviderTransport
from .websocket import WebSocketTransport


def transport_from_url(url: str | Path) -> Transport:
    """Build the transport matching a URL scheme.

    ``http(s)://`` yields HTTP, ``ws(s)://`` WebSocket, anything else is
    treated as an IPC socket path.
    """
    text = str(url).strip()
    if text.startswith(("http://", "https://")):
        return HTTPTransport(text)
    if text.startswith(("ws://", "wss://")):
        return WebSocketTransport(text)
    return IPCTransport(text)


__all__ = [
    "Transport",
    "HTTPTransport",
    "WebSocketTransport",
    "IPCTransport",
    "ProviderTransport",
    "extract_result",
    "transport_from_url",
]
