"""Tests for dispatch configuration."""

from __future__ import annotations

import dataclasses

import pytest
from _fakes import succeed

from evm_rpc.client.config import (
    DEFAULT_POLLING_INTERVAL,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    DispatchConfig,
)
from evm_rpc.client.dispatch import DispatchClient
from evm_rpc.exceptions import ConfigurationError
from evm_rpc.transport import HTTPTransport


def test_config_is_frozen() -> None:
    config = DispatchConfig(transports=[succeed("0x1")])

    assert isinstance(config.transports, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.timeout = 1.0  # type: ignore[misc]


def test_attempts_counts_the_first_try() -> None:
    assert DispatchConfig(transports=[succeed("0x1")], retry_count=0).attempts == 1
    assert DispatchConfig(transports=[succeed("0x1")], retry_count=4).attempts == 5


def test_with_overrides_revalidates() -> None:
    config = DispatchConfig(transports=[succeed("0x1")])

    faster = config.with_overrides(timeout=2.5)
    assert faster.timeout == 2.5
    assert faster.transports == config.transports

    with pytest.raises(ConfigurationError):
        config.with_overrides(retry_count=-3)


def test_retry_count_must_be_an_integer() -> None:
    with pytest.raises(ConfigurationError):
        DispatchConfig(transports=[succeed("0x1")], retry_count=1.5)  # type: ignore[arg-type]


def test_transport_without_request_rejected() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        DispatchConfig(transports=[object()])  # type: ignore[list-item]
    assert excinfo.value.field == "transports"


def test_from_env_uses_defaults_when_unset() -> None:
    transport = succeed("0x1")
    config = DispatchConfig.from_env([transport], environ={})

    assert config.transports == (transport,)
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.polling_interval == DEFAULT_POLLING_INTERVAL
    assert config.retry_count == DEFAULT_RETRY_COUNT


def test_from_env_reads_overrides_and_urls() -> None:
    config = DispatchConfig.from_env(
        environ={
            "EVM_RPC_URLS": "https://primary.example, http://backup.example:8545",
            "EVM_RPC_TIMEOUT": "12.5",
            "EVM_RPC_POLLING_INTERVAL": "0.5",
            "EVM_RPC_RETRY_COUNT": "0",
        }
    )

    assert [type(t) for t in config.transports] == [HTTPTransport, HTTPTransport]
    assert [t.endpoint for t in config.transports] == [
        "https://primary.example",
        "http://backup.example:8545",
    ]
    assert config.timeout == 12.5
    assert config.polling_interval == 0.5
    assert config.retry_count == 0


def test_from_env_without_urls_fails_validation() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        DispatchConfig.from_env(environ={})
    assert excinfo.value.field == "transports"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("EVM_RPC_TIMEOUT", "soon"),
        ("EVM_RPC_TIMEOUT", "nan"),
        ("EVM_RPC_TIMEOUT", "inf"),
        ("EVM_RPC_POLLING_INTERVAL", "-inf"),
        ("EVM_RPC_RETRY_COUNT", "2.5"),
    ],
)
def test_from_env_rejects_unparsable_values(name: str, value: str) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        DispatchConfig.from_env([succeed("0x1")], environ={name: value})
    assert excinfo.value.field == name


def test_client_from_config_keeps_instance() -> None:
    config = DispatchConfig(transports=[succeed("0x1")], retry_count=1)
    client = DispatchClient.from_config(config)
    assert client.config is config
