"""Savings Dai (sDAI, ERC-4626) deposit/redeem actions and previews."""

import logging
from decimal import Decimal
from typing import Optional

from ..contracts.abis import SAVINGS_DAI_ABI
from ..contracts.binding import ContractBinding, call_contract
from ..core.amounts import from_base_units, to_base_units
from ..core.cache import ResolveOnceCache
from ..core.config import McdConfig
from ..core.types import EthereumTxType, ProtocolAction
from ..core.validators import (
    validate_amount,
    validate_deposit_params,
    validate_redeem_params,
)
from ..transactions.builder import TransactionBatch, TransactionBuilder
from .allowance import AllowanceGate
from .erc20 import Erc20Service

logger = logging.getLogger(__name__)


class SavingsDaiService:
    """Builds sDAI deposit/redeem batches and runs preview queries."""

    def __init__(
        self,
        provider,
        config: McdConfig,
        savings_dai_address: Optional[str] = None,
        erc20_service: Optional[Erc20Service] = None
    ):
        self.provider = provider
        self.config = config
        self.savings_dai = ContractBinding.from_abi(
            savings_dai_address or config.savings_dai_address, SAVINGS_DAI_ABI
        )
        self.tx_builder = TransactionBuilder(provider, config)
        self.erc20_service = erc20_service or Erc20Service(provider, self.tx_builder)
        self.allowance_gate = AllowanceGate(self.erc20_service)
        self._dai: ResolveOnceCache[str] = ResolveOnceCache()

    async def dai_address(self) -> str:
        """Underlying Dai address, read from the vault once."""
        return await self._dai.get_or_fetch(
            self.savings_dai.address,
            lambda: call_contract(self.provider, self.savings_dai, "dai")
        )

    async def deposit(self, user_address: str, receiver: str, assets: str) -> TransactionBatch:
        """
        Build the batch for depositing ``assets`` Dai.

        Args:
            user_address: Sender, pays the Dai
            receiver: Receives the sDAI shares
            assets: Dai amount as a decimal string

        Returns:
            [approval?, deposit] in execution order
        """
        params = validate_deposit_params(user_address, receiver, assets)
        dai = await self.dai_address()

        dai_decimals = await self.erc20_service.decimals_of(dai)
        amount = to_base_units(params.assets, dai_decimals, field="assets")

        txs: TransactionBatch = []
        approval = await self.allowance_gate.ensure_allowance(
            token=dai,
            owner=params.user_address,
            spender=self.savings_dai.address,
            required_amount=amount
        )
        if approval is not None:
            txs.append(approval)

        txs.append(self.tx_builder.build_descriptor(
            prior=txs,
            binding=self.savings_dai,
            method="deposit",
            args=(amount, params.receiver),
            from_address=params.user_address,
            tx_type=EthereumTxType.SAVINGS_DAI_ACTION,
            action=ProtocolAction.SAVINGS_DAI_DEPOSIT
        ))

        logger.info(f"Built deposit batch for {params.user_address}: {amount} base units, {len(txs)} transactions")
        return txs

    async def redeem(
        self,
        user_address: str,
        receiver: str,
        owner: str,
        shares: str
    ) -> TransactionBatch:
        """
        Build the batch for redeeming ``shares`` sDAI.

        Shares are burned from ``owner``; no token approval is involved.
        """
        params = validate_redeem_params(user_address, receiver, owner, shares)

        share_decimals = await self.erc20_service.decimals_of(self.savings_dai.address)
        amount = to_base_units(params.shares, share_decimals, field="shares")

        txs: TransactionBatch = [self.tx_builder.build_descriptor(
            prior=[],
            binding=self.savings_dai,
            method="redeem",
            args=(amount, params.receiver, params.owner),
            from_address=params.user_address,
            tx_type=EthereumTxType.SAVINGS_DAI_ACTION,
            action=ProtocolAction.SAVINGS_DAI_REDEEM
        )]

        logger.info(f"Built redeem batch for {params.user_address}: {amount} base units")
        return txs

    async def preview_deposit(self, assets: str) -> Decimal:
        """Shares minted for depositing ``assets`` Dai at current state."""
        assets = validate_amount(assets, "assets", allow_zero=True)
        dai_decimals = await self.erc20_service.decimals_of(await self.dai_address())
        share_decimals = await self.erc20_service.decimals_of(self.savings_dai.address)

        amount = to_base_units(assets, dai_decimals, field="assets")
        shares = await call_contract(self.provider, self.savings_dai, "previewDeposit", amount)
        return from_base_units(shares, share_decimals)

    async def preview_redeem(self, shares: str) -> Decimal:
        """Dai returned for redeeming ``shares`` at current state."""
        shares = validate_amount(shares, "shares", allow_zero=True)
        dai_decimals = await self.erc20_service.decimals_of(await self.dai_address())
        share_decimals = await self.erc20_service.decimals_of(self.savings_dai.address)

        amount = to_base_units(shares, share_decimals, field="shares")
        assets = await call_contract(self.provider, self.savings_dai, "previewRedeem", amount)
        return from_base_units(assets, dai_decimals)
