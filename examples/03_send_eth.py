"""Example: Sign and broadcast an EIP-1559 transfer, then wait for its receipt."""

from __future__ import annotations

import logging
import os
import time

from dotenv import load_dotenv

from evm_rpc import DispatchConfig, EmptyResponseError, EthClient, WalletClient

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

AMOUNT_WEI = 10**12  # 0.000001 ETH
GAS_LIMIT = 21_000
RECEIPT_POLLS = 30


def main() -> None:
    """Send a small amount of ETH to RECIPIENT_ADDRESS."""

    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ValueError("PRIVATE_KEY not found in environment variables")
    recipient = os.getenv("RECIPIENT_ADDRESS")
    if not recipient:
        raise ValueError("RECIPIENT_ADDRESS not found in environment variables")

    with EthClient.from_config(DispatchConfig.from_env()) as eth:
        wallet = WalletClient(eth, private_key)

        base_fee = eth.get_block_by_number().base_fee_per_gas or eth.gas_price()
        max_priority = 2 * 10**9
        max_fee = 2 * base_fee + max_priority

        tx_hash = wallet.send_eth(recipient, AMOUNT_WEI, GAS_LIMIT, max_fee, max_priority)
        logging.info("Submitted %s", tx_hash.to_0x_hex())

        for _ in range(RECEIPT_POLLS):
            try:
                receipt = eth.get_transaction_receipt(tx_hash)
            except EmptyResponseError:
                time.sleep(2)
                continue

            logging.info(
                "Mined in block %s, status=%s, gas used=%s",
                receipt.block_number,
                receipt.status,
                receipt.gas_used,
            )
            return

        logging.warning("Transaction %s not mined yet", tx_hash.to_0x_hex())


if __name__ == "__main__":
    main()
