#!/usr/bin/env python3
"""
Example: Building PSM and savings Dai batches

Demonstrates:
- Chainlog address resolution
- Buying USDC from the PSM (approval + buyGem)
- Depositing Dai into sDAI and previewing the shares
- Reading the Dai savings rate from the Pot

Nothing is signed or sent; each transaction is only encoded and simulated.

Requirements:
- MCD_RPC_URL pointing at an Ethereum mainnet node (defaults to a public one)
- USER_ADDRESS set to an account to simulate from
"""

import asyncio
import logging
import os

from mcd_sdk import (
    GasEstimationError,
    JsonRpcProvider,
    McdConfig,
    McdSDKError,
    PotService,
    PsmService,
    SavingsDaiService,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

USER_ADDRESS = os.environ.get('USER_ADDRESS', '0x1111111111111111111111111111111111111111')


async def show_batch(label, txs):
    print(f"\n{label}: {len(txs)} transaction(s)")
    for i, descriptor in enumerate(txs):
        try:
            estimate = await descriptor.gas()
            source = "simulated" if estimate.simulated else "recommended"
            print(f"  {i + 1}. {descriptor.tx_type.value}: gas {estimate.gas_limit} ({source})")
        except GasEstimationError as e:
            # Expected for accounts without balance
            print(f"  {i + 1}. {descriptor.tx_type.value}: gas estimation failed: {e}")


async def main():
    config = McdConfig.from_env()

    async with JsonRpcProvider(config) as provider:
        psm = PsmService(provider, config, name="USDC")
        savings_dai = SavingsDaiService(provider, config)
        pot = PotService(provider, config)

        try:
            contracts = await psm.load_contracts()
            print(f"PSM: {contracts.psm.address}")
            print(f"Buy fee multiplier: {await psm.tout()}")

            await show_batch("buy_gem 100 USDC", await psm.buy_gem(USER_ADDRESS, USER_ADDRESS, "100"))
            await show_batch("deposit 250 Dai", await savings_dai.deposit(USER_ADDRESS, USER_ADDRESS, "250"))

            print(f"\n250 Dai previews to {await savings_dai.preview_deposit('250')} sDAI")
            print(f"Dai savings rate: {await pot.get_dai_savings_rate():.4%}")

        except ValidationError as e:
            print(f"Invalid input ({e.field}): {e}")
        except McdSDKError as e:
            logger.error(f"SDK error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
