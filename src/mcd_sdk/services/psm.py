"""Peg stability module (DssPsm) actions and queries."""

import logging
from decimal import Decimal
from typing import NamedTuple, Optional

from ..contracts.abis import PSM_ABI
from ..contracts.binding import ContractBinding, call_contract
from ..core.amounts import WAD, from_wad, rescale, to_base_units
from ..core.cache import ResolveOnceCache
from ..core.config import McdConfig
from ..core.types import EthereumTxType, ProtocolAction
from ..core.validators import validate_psm_params
from ..transactions.builder import TransactionBatch, TransactionBuilder
from .allowance import AllowanceGate
from .erc20 import Erc20Service
from .registry import AddressRegistry

logger = logging.getLogger(__name__)


class PsmContracts(NamedTuple):
    psm: ContractBinding
    gem: str
    dai: str


class PsmService:
    """
    Builds PSM swap batches.

    ``buy_gem`` swaps Dai for the gem (e.g. USDC), ``sell_gem`` swaps the gem
    for Dai. Amounts are human decimal strings in gem units.

    Example:
        ```python
        async with JsonRpcProvider(config) as provider:
            psm = PsmService(provider, config, name="USDC")
            txs = await psm.buy_gem(user_address=me, usr=me, gem_amt="100")
            for tx in txs:
                raw = await tx.tx()
        ```
    """

    def __init__(
        self,
        provider,
        config: McdConfig,
        name: str = "USDC",
        registry: Optional[AddressRegistry] = None,
        erc20_service: Optional[Erc20Service] = None
    ):
        """
        Args:
            provider: JSON-RPC provider used for reads and simulation
            config: MCD configuration
            name: Gem symbol as registered in the chainlog
            registry: Shared registry; a new one on ``config.chainlog_address`` by default
            erc20_service: Shared token service
        """
        self.provider = provider
        self.config = config
        self.name = name
        self.registry = registry or AddressRegistry(provider, config.chainlog_address)
        self.tx_builder = TransactionBuilder(provider, config)
        self.erc20_service = erc20_service or Erc20Service(provider, self.tx_builder)
        self.allowance_gate = AllowanceGate(self.erc20_service)
        self._gem_joins: ResolveOnceCache[str] = ResolveOnceCache()

    async def load_contracts(self) -> PsmContracts:
        """Resolve the PSM, gem and Dai addresses (cached by the registry)."""
        psm_address = await self.registry.resolve(f"MCD_PSM_{self.name}_A")
        gem_address = await self.registry.resolve(self.name)
        dai_address = await self.registry.resolve("MCD_DAI")
        return PsmContracts(
            psm=ContractBinding.from_abi(psm_address, PSM_ABI),
            gem=gem_address,
            dai=dai_address
        )

    async def buy_gem(self, user_address: str, usr: str, gem_amt: str) -> TransactionBatch:
        """
        Build the batch for buying ``gem_amt`` gems with Dai.

        The user pays Dai, so the allowance is checked on Dai for the PSM and
        covers the amount plus the ``tout`` fee.

        Args:
            user_address: Sender of the transactions
            usr: Recipient of the gems
            gem_amt: Gem amount as a decimal string

        Returns:
            [approval?, buyGem] in execution order

        Raises:
            ValidationError: Invalid address or amount
            ResolutionError: Chainlog lookup failed
        """
        params = validate_psm_params(user_address, usr, gem_amt)
        contracts = await self.load_contracts()

        gem_decimals = await self.erc20_service.decimals_of(contracts.gem)
        gem_amount = to_base_units(params.gem_amt, gem_decimals, field="gem_amt")

        dai_decimals = await self.erc20_service.decimals_of(contracts.dai)
        tout = await call_contract(self.provider, contracts.psm, "tout")
        dai_amount = rescale(gem_amount, gem_decimals, dai_decimals)
        dai_required = dai_amount + dai_amount * tout // WAD

        txs: TransactionBatch = []
        approval = await self.allowance_gate.ensure_allowance(
            token=contracts.dai,
            owner=params.user_address,
            spender=contracts.psm.address,
            required_amount=dai_required
        )
        if approval is not None:
            txs.append(approval)

        txs.append(self.tx_builder.build_descriptor(
            prior=txs,
            binding=contracts.psm,
            method="buyGem",
            args=(params.usr, gem_amount),
            from_address=params.user_address,
            tx_type=EthereumTxType.PSM_ACTION,
            action=ProtocolAction.PSM_BUY_GEM
        ))

        logger.info(f"Built buy_gem batch for {params.user_address}: {gem_amount} base units, {len(txs)} transactions")
        return txs

    async def sell_gem(self, user_address: str, usr: str, gem_amt: str) -> TransactionBatch:
        """
        Build the batch for selling ``gem_amt`` gems for Dai.

        The gem is pulled by the PSM's GemJoin adapter, so that is the spender
        the allowance is checked for.

        Args:
            user_address: Sender of the transactions
            usr: Recipient of the Dai
            gem_amt: Gem amount as a decimal string

        Returns:
            [approval?, sellGem] in execution order
        """
        params = validate_psm_params(user_address, usr, gem_amt)
        contracts = await self.load_contracts()

        gem_decimals = await self.erc20_service.decimals_of(contracts.gem)
        gem_amount = to_base_units(params.gem_amt, gem_decimals, field="gem_amt")
        gem_join_address = await self.gem_join()

        txs: TransactionBatch = []
        approval = await self.allowance_gate.ensure_allowance(
            token=contracts.gem,
            owner=params.user_address,
            spender=gem_join_address,
            required_amount=gem_amount
        )
        if approval is not None:
            txs.append(approval)

        txs.append(self.tx_builder.build_descriptor(
            prior=txs,
            binding=contracts.psm,
            method="sellGem",
            args=(params.usr, gem_amount),
            from_address=params.user_address,
            tx_type=EthereumTxType.PSM_ACTION,
            action=ProtocolAction.PSM_SELL_GEM
        ))

        logger.info(f"Built sell_gem batch for {params.user_address}: {gem_amount} base units, {len(txs)} transactions")
        return txs

    async def gem_join(self) -> str:
        """Address of the PSM's GemJoin adapter, read once."""
        contracts = await self.load_contracts()
        return await self._gem_joins.get_or_fetch(
            contracts.psm.address,
            lambda: call_contract(self.provider, contracts.psm, "gemJoin")
        )

    async def tin(self) -> Decimal:
        """Sell-side fee multiplier, e.g. 1.001 for a 0.1% fee."""
        contracts = await self.load_contracts()
        return from_wad(await call_contract(self.provider, contracts.psm, "tin")) + 1

    async def tout(self) -> Decimal:
        """Buy-side fee multiplier."""
        contracts = await self.load_contracts()
        return from_wad(await call_contract(self.provider, contracts.psm, "tout")) + 1
