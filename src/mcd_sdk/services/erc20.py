"""ERC-20 token reads and approval descriptors."""

import logging

from ..contracts.abis import ERC20_ABI
from ..contracts.binding import ContractBinding, call_contract
from ..core.cache import ResolveOnceCache
from ..core.types import EthereumTxType, ProtocolAction
from ..transactions.builder import TransactionBuilder, TransactionDescriptor

logger = logging.getLogger(__name__)


class Erc20Service:
    """Token service used by the allowance gate and the action builders."""

    def __init__(self, provider, tx_builder: TransactionBuilder):
        self.provider = provider
        self.tx_builder = tx_builder
        self._decimals: ResolveOnceCache[int] = ResolveOnceCache()

    def _token(self, token: str) -> ContractBinding:
        return ContractBinding.from_abi(token, ERC20_ABI)

    async def decimals_of(self, token: str) -> int:
        """Token decimals, read once per token."""
        binding = self._token(token)
        return await self._decimals.get_or_fetch(
            binding.address,
            lambda: call_contract(self.provider, binding, "decimals")
        )

    async def allowance(self, token: str, owner: str, spender: str) -> int:
        """Current allowance in base units."""
        return await call_contract(self.provider, self._token(token), "allowance", owner, spender)

    async def is_approved(self, token: str, owner: str, spender: str, amount: int) -> bool:
        """Whether ``spender`` may already move ``amount`` base units of ``owner``'s tokens."""
        current = await self.allowance(token, owner, spender)
        logger.debug(f"Allowance of {spender} on {token} for {owner}: {current} (need {amount})")
        return current >= amount

    def approve(self, token: str, owner: str, spender: str, amount: int) -> TransactionDescriptor:
        """Deferred ``approve(spender, amount)`` sent by ``owner``."""
        return self.tx_builder.build_descriptor(
            prior=[],
            binding=self._token(token),
            method="approve",
            args=(spender, amount),
            from_address=owner,
            tx_type=EthereumTxType.ERC20_APPROVAL,
            action=ProtocolAction.APPROVAL
        )
