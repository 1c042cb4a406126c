"""Pot (Dai savings rate) queries."""

from decimal import Decimal
from typing import Optional

from ..contracts.abis import POT_ABI
from ..contracts.binding import ContractBinding, call_contract
from ..core.amounts import annualize_rate, from_ray
from ..core.config import McdConfig


class PotService:
    """Read-only access to the Pot contract."""

    def __init__(self, provider, config: McdConfig, pot_address: Optional[str] = None):
        self.provider = provider
        self.pot = ContractBinding.from_abi(pot_address or config.pot_address, POT_ABI)

    async def get_chi(self) -> Decimal:
        """Accumulated rate, chi / 1e27."""
        return from_ray(await call_contract(self.provider, self.pot, "chi"))

    async def get_dai_savings_rate(self) -> Decimal:
        """Annual Dai savings rate, e.g. Decimal('0.05') for 5%."""
        dsr = await call_contract(self.provider, self.pot, "dsr")
        return annualize_rate(dsr)
