"""Example: Send raw JSON-RPC calls through a fallback list of endpoints."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from evm_rpc import DispatchClient, ETHMethod, HTTPTransport, RetriesExhaustedError

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main() -> None:
    """Query the chain head, falling back from a dead endpoint to a live one."""

    primary_url = os.getenv("PRIMARY_RPC", "http://localhost:8545")
    backup_url = os.getenv("BACKUP_RPC", "https://ethereum-sepolia-rpc.publicnode.com")

    client = DispatchClient(
        HTTPTransport(primary_url, request_timeout=3),
        HTTPTransport(backup_url),
        timeout=20,
        polling_interval=2,
        retry_count=2,
    )

    with client:
        try:
            raw = client.request(ETHMethod.BLOCK_NUMBER)
        except RetriesExhaustedError as exc:
            logging.error("No endpoint answered: %s", exc.last_error)
            return

        # Raw bytes are the JSON encoding of the result member
        logging.info("eth_blockNumber -> %s", raw.decode())


if __name__ == "__main__":
    main()
