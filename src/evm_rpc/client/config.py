"""Configuration containers for the dispatch client."""

from __future__ import annotations

import dataclasses
import math
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ..exceptions import ConfigurationError
from ..transport import Transport, transport_from_url

DEFAULT_TIMEOUT = 30.0
DEFAULT_POLLING_INTERVAL = 5.0
DEFAULT_RETRY_COUNT = 3
MIN_RETRY_COUNT = 0

ENV_URLS = "EVM_RPC_URLS"
ENV_TIMEOUT = "EVM_RPC_TIMEOUT"
ENV_POLLING_INTERVAL = "EVM_RPC_POLLING_INTERVAL"
ENV_RETRY_COUNT = "EVM_RPC_RETRY_COUNT"


@dataclass(frozen=True)
class DispatchConfig:
    """Immutable settings for a dispatch client.

    ``transports`` is ordered by fallback priority. Values are checked once
    here and never again per request.
    """

    transports: tuple[Transport, ...] = field(default_factory=tuple)
    timeout: float = DEFAULT_TIMEOUT
    polling_interval: float = DEFAULT_POLLING_INTERVAL
    retry_count: int = DEFAULT_RETRY_COUNT

    def __post_init__(self) -> None:
        object.__setattr__(self, "transports", tuple(self.transports))

        if not self.transports:
            raise ConfigurationError("at least one transport required", field="transports")
        for transport in self.transports:
            if not callable(getattr(transport, "request", None)):
                raise ConfigurationError(
                    "transport does not implement request()",
                    field="transports",
                    value=transport,
                )
        _check_seconds("timeout", self.timeout)
        _check_seconds("polling_interval", self.polling_interval)
        if isinstance(self.retry_count, bool) or not isinstance(self.retry_count, int):
            raise ConfigurationError(
                "retry count must be an integer", field="retry_count", value=self.retry_count
            )
        if self.retry_count < MIN_RETRY_COUNT:
            raise ConfigurationError(
                f"retry count must be >= {MIN_RETRY_COUNT}",
                field="retry_count",
                value=self.retry_count,
            )

    @property
    def attempts(self) -> int:
        return self.retry_count + 1

    def with_overrides(self, **changes) -> DispatchConfig:
        """Return a validated copy with ``changes`` applied."""

        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        transports: Iterable[Transport] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> DispatchConfig:
        """Build a config from ``EVM_RPC_*`` environment variables.

        ``EVM_RPC_URLS`` (comma separated) is only read when ``transports``
        is not given. Unset variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ

        if transports is None:
            urls = [url.strip() for url in env.get(ENV_URLS, "").split(",") if url.strip()]
            transports = [transport_from_url(url) for url in urls]

        return cls(
            transports=tuple(transports),
            timeout=_read_float(env, ENV_TIMEOUT, DEFAULT_TIMEOUT),
            polling_interval=_read_float(env, ENV_POLLING_INTERVAL, DEFAULT_POLLING_INTERVAL),
            retry_count=_read_int(env, ENV_RETRY_COUNT, DEFAULT_RETRY_COUNT),
        )


def _check_seconds(name: str, value: object) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
    ):
        raise ConfigurationError(f"{name} must be a finite number", field=name, value=value)
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive", field=name, value=value)


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number", field=name, value=raw) from exc
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number", field=name, value=raw)
    return value


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer", field=name, value=raw) from exc
