"""Example: Typed chain reads with endpoints taken from the environment."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from web3 import Web3

from evm_rpc import BlockTag, DispatchConfig, EthClient, RequestContext

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Vitalik's public address, used only as a read target
WATCHED_ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def main() -> None:
    """Print head block, fees and a balance using EVM_RPC_URLS."""

    if not os.getenv("EVM_RPC_URLS"):
        raise ValueError("EVM_RPC_URLS not found in environment variables")

    config = DispatchConfig.from_env()

    with EthClient.from_config(config) as eth:
        logging.info("Chain id: %s", eth.get_chain_id())

        head = eth.get_block_by_number(BlockTag.LATEST)
        logging.info(
            "Head block %s has %d transactions (base fee %s wei)",
            head.number,
            len(head.transaction_hashes),
            head.base_fee_per_gas,
        )

        history = eth.fee_history(4, head.number, reward_percentiles=[25, 75])
        logging.info("Base fees since block %s: %s", history.oldest_block, history.base_fee_per_gas)

        # Give the balance lookup its own, shorter deadline
        context = RequestContext.from_timeout(5)
        balance = eth.get_balance(WATCHED_ADDRESS, BlockTag.FINALIZED, context=context)
        logging.info("Balance of %s: %s ETH", WATCHED_ADDRESS, Web3.from_wei(balance, "ether"))


if __name__ == "__main__":
    main()
