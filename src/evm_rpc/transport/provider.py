"""Transports that delegate the wire exchange to a web3 provider."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any

from web3.providers.base import JSONBaseProvider
from web3.types import RPCEndpoint

from ..context import RequestContext
from ..exceptions import TransportError
from .base import Transport, extract_result

logger = logging.getLogger(__name__)


class ProviderTransport(Transport):
    """Wrap a synchronous web3 provider as a transport.

    The provider owns its socket and serialises access to it, so one instance
    can be shared by concurrent calls. When ``timeout_attribute`` names the
    provider's timeout setting, each call lowers it to the time left on the
    request context.
    """

    timeout_attribute: str | None = None

    def __init__(self, endpoint: str, provider: JSONBaseProvider) -> None:
        self.endpoint = endpoint
        self._provider = provider
        self._lock = threading.Lock()

    @property
    def provider(self) -> JSONBaseProvider:
        return self._provider

    def request(self, method: str, params: Sequence[Any], context: RequestContext) -> bytes:
        context.raise_if_done()
        logger.debug("%s call method=%s", type(self).__name__, method)

        try:
            envelope = self._make_request(method, params, context)
        except Exception as exc:
            context.raise_if_done()
            raise TransportError(
                f"{type(self).__name__} request for {method} failed",
                endpoint=self.endpoint,
                details={"error": str(exc)},
            ) from exc

        # The provider has its own timeout; the caller's deadline may have passed meanwhile.
        context.raise_if_done()

        return extract_result(envelope, self.endpoint)

    def _make_request(self, method: str, params: Sequence[Any], context: RequestContext) -> Any:
        remaining = context.remaining()
        if self.timeout_attribute is None or remaining is None:
            return self._provider.make_request(RPCEndpoint(method), list(params))

        with self._lock:
            configured = getattr(self._provider, self.timeout_attribute)
            setattr(self._provider, self.timeout_attribute, min(configured, remaining))
            try:
                return self._provider.make_request(RPCEndpoint(method), list(params))
            finally:
                setattr(self._provider, self.timeout_attribute, configured)
