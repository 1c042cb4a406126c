"""Decides whether an approval must precede an action."""

import logging
from typing import Optional

from ..core.amounts import MAX_ALLOWANCE
from ..transactions.builder import TransactionDescriptor
from .erc20 import Erc20Service

logger = logging.getLogger(__name__)


class AllowanceGate:
    """Prepends an unlimited approval when the current allowance is short."""

    def __init__(self, erc20_service: Erc20Service):
        self.erc20_service = erc20_service

    async def ensure_allowance(
        self,
        token: str,
        owner: str,
        spender: str,
        required_amount: int
    ) -> Optional[TransactionDescriptor]:
        """
        Return an approval descriptor, or None if none is needed.

        Approvals are always for MAX_ALLOWANCE so later calls do not need
        another one. Allowance read failures propagate unchanged.

        Args:
            token: Token the spender will move
            owner: Token holder and sender of the approval
            spender: Contract that pulls the tokens
            required_amount: Amount in base units the action needs
        """
        if await self.erc20_service.is_approved(token, owner, spender, required_amount):
            return None

        logger.info(f"Approval needed: {owner} -> {spender} on {token}")
        return self.erc20_service.approve(token, owner, spender, MAX_ALLOWANCE)
