"""WebSocket JSON-RPC transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from web3 import LegacyWebSocketProvider

from ..exceptions import ConfigurationError
from .provider import ProviderTransport

logger = logging.getLogger(__name__)

DEFAULT_WEBSOCKET_TIMEOUT = 10.0


class WebSocketTransport(ProviderTransport):
    """Send JSON-RPC calls over a persistent WebSocket connection."""

    timeout_attribute = "websocket_timeout"

    def __init__(
        self,
        endpoint: str,
        *,
        websocket_timeout: float = DEFAULT_WEBSOCKET_TIMEOUT,
        websocket_kwargs: Mapping[str, Any] | None = None,
    ) -> None:
        if not endpoint.startswith(("ws://", "wss://")):
            raise ConfigurationError(
                "WebSocket endpoint must use ws:// or wss://", field="endpoint", value=endpoint
            )

        provider = LegacyWebSocketProvider(
            endpoint,
            websocket_timeout=websocket_timeout,
            websocket_kwargs=dict(websocket_kwargs or {}),
        )
        super().__init__(endpoint, provider)
        logger.info("WebSocket transport ready for %s", endpoint)
