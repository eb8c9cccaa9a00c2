"""HTTP JSON-RPC transport backed by a requests session."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import requests

from ..context import RequestContext
from ..exceptions import ConfigurationError, TransportError
from .base import Transport, build_payload, extract_result

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 10.0


class HTTPTransport(Transport):
    """POST JSON-RPC requests to an HTTP(S) endpoint."""

    def __init__(
        self,
        endpoint: str,
        *,
        session: requests.Session | None = None,
        request_timeout: float = DEFAULT_HTTP_TIMEOUT,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        if not endpoint:
            raise ConfigurationError("HTTP endpoint is required", field="endpoint", value=endpoint)
        if request_timeout <= 0:
            raise ConfigurationError(
                "HTTP request timeout must be positive",
                field="request_timeout",
                value=request_timeout,
            )

        self.endpoint = endpoint
        self._session = session or requests.Session()
        self._request_timeout = request_timeout
        self._headers = {"Content-Type": "application/json", **dict(headers or {})}
        self._ids = itertools.count(1)
        logger.info("HTTP transport ready for %s", endpoint)

    def request(self, method: str, params: Sequence[Any], context: RequestContext) -> bytes:
        context.raise_if_done()

        timeout = self._request_timeout
        remaining = context.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        payload = build_payload(next(self._ids), method, params)
        logger.debug("POST %s method=%s id=%s", self.endpoint, method, payload["id"])

        try:
            response = self._session.post(
                self.endpoint, json=payload, headers=self._headers, timeout=timeout
            )
        except requests.Timeout as exc:
            context.raise_if_done()
            raise TransportError(
                f"Timed out calling {method}",
                endpoint=self.endpoint,
                details={"timeout": timeout, "error": str(exc)},
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(
                f"HTTP request for {method} failed",
                endpoint=self.endpoint,
                details={"error": str(exc)},
            ) from exc

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"HTTP {response.status_code} from JSON-RPC endpoint",
                endpoint=self.endpoint,
                status_code=response.status_code,
                details={"body": response.text[:512]},
            )

        try:
            envelope = response.json()
        except ValueError as exc:
            raise TransportError(
                "JSON-RPC endpoint returned a non-JSON body",
                endpoint=self.endpoint,
                status_code=response.status_code,
                details={"body": response.text[:512]},
            ) from exc

        return extract_result(envelope, self.endpoint)

    def close(self) -> None:
        self._session.close()
