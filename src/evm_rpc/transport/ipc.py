"""IPC (unix socket) JSON-RPC transport."""

from __future__ import annotations

import logging
from pathlib import Path

from web3 import IPCProvider

from ..exceptions import ConfigurationError
from .provider import ProviderTransport

logger = logging.getLogger(__name__)

DEFAULT_IPC_TIMEOUT = 10.0


class IPCTransport(ProviderTransport):
    """Send JSON-RPC calls over a node's IPC socket."""

    timeout_attribute = "timeout"

    def __init__(self, path: str | Path, *, timeout: float = DEFAULT_IPC_TIMEOUT) -> None:
        if not str(path):
            raise ConfigurationError("IPC path is required", field="path", value=path)

        ipc_path = str(path)
        super().__init__(ipc_path, IPCProvider(ipc_path, timeout=timeout))
        logger.info("IPC transport ready for %s", ipc_path)
