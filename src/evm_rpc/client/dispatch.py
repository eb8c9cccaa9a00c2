"""Fallback and retry dispatch across an ordered list of transports."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ..constants import method_name
from ..context import RequestContext
from ..exceptions import (
    ConfigurationError,
    ContextError,
    RetriesExhaustedError,
    ValidationError,
)
from ..transport import Transport
from .config import (
    DEFAULT_POLLING_INTERVAL,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    DispatchConfig,
)

logger = logging.getLogger(__name__)


class DispatchClient:
    """Deliver each JSON-RPC call to the first transport that answers.

    Every attempt walks the transports in priority order. When all of them
    fail the client waits ``polling_interval`` and starts over, up to
    ``retry_count`` more times. Failed transports are not remembered between
    attempts, so one that recovers is used again on the next round.
    """

    def __init__(
        self,
        *transports: Transport,
        timeout: float | None = None,
        polling_interval: float | None = None,
        retry_count: int | None = None,
        config: DispatchConfig | None = None,
    ) -> None:
        options = (timeout, polling_interval, retry_count)
        if config is not None:
            if transports or any(option is not None for option in options):
                raise ConfigurationError(
                    "pass either a config or transports and options, not both",
                    field="config",
                )
        else:
            config = DispatchConfig(
                transports=transports,
                timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
                polling_interval=(
                    DEFAULT_POLLING_INTERVAL if polling_interval is None else polling_interval
                ),
                retry_count=DEFAULT_RETRY_COUNT if retry_count is None else retry_count,
            )
        self._config = config
        logger.info(
            "Dispatch client ready with %d transport(s), timeout=%ss retries=%d",
            len(config.transports),
            config.timeout,
            config.retry_count,
        )

    @classmethod
    def from_config(cls, config: DispatchConfig) -> DispatchClient:
        return cls(config=config)

    @property
    def config(self) -> DispatchConfig:
        return self._config

    @property
    def transports(self) -> tuple[Transport, ...]:
        return self._config.transports

    def request(
        self,
        method: str | Enum,
        *params: Any,
        context: RequestContext | None = None,
    ) -> bytes:
        """Dispatch ``method`` and return the raw JSON result bytes.

        Raises:
            ValidationError: If ``method`` is empty
            ContextError: If the bounded deadline passed or the caller
                cancelled before a transport answered
            RetriesExhaustedError: If every attempt failed on every transport
        """
        name = method_name(method)
        if not name:
            raise ValidationError("method is required", field="method", value=method)

        parent = context or RequestContext.background()
        bounded = parent.with_timeout(self._config.timeout)
        try:
            return self._dispatch(name, params, bounded)
        finally:
            parent.release(bounded)

    def _dispatch(self, method: str, params: tuple[Any, ...], context: RequestContext) -> bytes:
        config = self._config
        last_error: Exception | None = None

        for attempt in range(config.attempts):
            context.raise_if_done()

            for transport in config.transports:
                context.raise_if_done()
                try:
                    return transport.request(method, params, context)
                except ContextError:
                    raise
                except Exception as exc:
                    last_error = exc
                    logger.debug(
                        "Transport %r failed for %s (attempt %d/%d): %s",
                        transport,
                        method,
                        attempt + 1,
                        config.attempts,
                        exc,
                    )

            logger.warning(
                "All %d transport(s) failed for %s on attempt %d/%d",
                len(config.transports),
                method,
                attempt + 1,
                config.attempts,
            )
            if attempt < config.retry_count:
                context.sleep(config.polling_interval)

        raise RetriesExhaustedError(config.attempts, last_error) from last_error

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        for transport in self._config.transports:
            close = getattr(transport, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> DispatchClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
