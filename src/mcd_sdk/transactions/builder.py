"""Transaction building functionality for the MCD SDK."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Sequence, Tuple

from ..contracts.binding import ContractBinding
from ..core.config import McdConfig
from ..core.exceptions import GasEstimationError
from ..core.types import (
    DEFAULT_NULL_VALUE_ON_TX,
    EthereumTxType,
    GasEstimate,
    ProtocolAction,
    RawTransaction,
)

logger = logging.getLogger(__name__)

TxCallback = Callable[[], Awaitable[RawTransaction]]
GasCallback = Callable[..., Awaitable[GasEstimate]]

# Used only when a pending approval earlier in the batch makes simulation impossible
GAS_LIMIT_RECOMMENDATIONS = {
    ProtocolAction.DEFAULT: 210000,
    ProtocolAction.APPROVAL: 65000,
    ProtocolAction.PSM_BUY_GEM: 200000,
    ProtocolAction.PSM_SELL_GEM: 200000,
    ProtocolAction.SAVINGS_DAI_DEPOSIT: 250000,
    ProtocolAction.SAVINGS_DAI_REDEEM: 250000,
}


@dataclass
class TransactionDescriptor:
    """
    A single deferred transaction.

    ``tx`` and ``gas`` are async callables that are not evaluated when the
    descriptor is created. Each call re-runs the encoding and simulation
    against current chain state; nothing is memoised.

    ``gas(force=False)`` reports the recommended limit instead of simulating
    when an approval earlier in the same batch is still pending; pass
    ``force=True`` to simulate regardless.
    """
    tx_type: EthereumTxType
    from_address: str
    tx: TxCallback
    gas: GasCallback
    value: int = DEFAULT_NULL_VALUE_ON_TX


# Ordered; an approval, when present, always comes first
TransactionBatch = List[TransactionDescriptor]


class TransactionBuilder:
    """Builds deferred transaction and gas callables for one provider."""

    def __init__(self, provider, config: McdConfig):
        self.provider = provider
        self.config = config

    async def estimate_gas(self, raw_tx: RawTransaction, tx_type: EthereumTxType) -> int:
        """
        Simulate ``raw_tx`` and add the configured surplus.

        Raises:
            GasEstimationError: Simulation reverted, the node call failed or
                the provider was unusable
        """
        try:
            estimated = int(await self.provider.estimate_gas(raw_tx.to_rpc_dict()))
        except Exception as e:
            raise GasEstimationError(
                f"Gas estimation failed for {tx_type.value} to {raw_tx.to}: {e}",
                tx_type=tx_type.value,
                details={'to': raw_tx.to, 'from': raw_tx.from_address}
            ) from e
        return estimated + estimated * self.config.gas_surplus // 100

    def generate_tx_callback(
        self,
        binding: ContractBinding,
        method: str,
        args: Tuple[Any, ...],
        from_address: str,
        tx_type: EthereumTxType,
        value: int = DEFAULT_NULL_VALUE_ON_TX
    ) -> TxCallback:
        """
        Build the deferred raw-transaction producer for a contract call.

        Args:
            binding: Target contract
            method: Contract function name
            args: Already converted call arguments
            from_address: Sender
            tx_type: Descriptor classification, reported on failure
            value: Ether value, always zero for the supported actions

        Returns:
            Zero-argument coroutine function producing a RawTransaction
        """
        async def tx_callback() -> RawTransaction:
            raw_tx = binding.populate_transaction(method, args, from_address, value)
            raw_tx.gas_limit = await self.estimate_gas(raw_tx, tx_type)
            return raw_tx

        return tx_callback

    def generate_gas_estimation(
        self,
        prior: Sequence[TransactionDescriptor],
        tx_callback: TxCallback,
        tx_type: EthereumTxType,
        action: ProtocolAction = ProtocolAction.DEFAULT
    ) -> GasCallback:
        """
        Build the deferred gas estimator for a descriptor.

        Args:
            prior: Descriptors already committed to the batch, in order
            tx_callback: The descriptor's raw-transaction producer
            tx_type: Descriptor classification, reported on failure
            action: Action used to look up the recommended gas limit

        Returns:
            Coroutine function ``gas(force=False) -> GasEstimate``
        """
        # Later appends to the caller's list are not part of this prefix
        prefix = tuple(prior)

        async def estimate(force: bool = False) -> GasEstimate:
            try:
                gas_price = await self.provider.get_gas_price()
            except Exception as e:
                raise GasEstimationError(
                    f"Failed to fetch gas price for {tx_type.value}: {e}",
                    tx_type=tx_type.value
                ) from e

            has_pending_approval = any(
                tx.tx_type == EthereumTxType.ERC20_APPROVAL for tx in prefix
            )
            if has_pending_approval and not force:
                gas_limit = GAS_LIMIT_RECOMMENDATIONS.get(
                    action, GAS_LIMIT_RECOMMENDATIONS[ProtocolAction.DEFAULT]
                )
                logger.debug(
                    f"Pending approval before {tx_type.value}, using recommended gas limit {gas_limit}"
                )
                return GasEstimate(gas_limit=gas_limit, gas_price=gas_price, simulated=False)

            raw_tx = await tx_callback()
            return GasEstimate(gas_limit=raw_tx.gas_limit, gas_price=gas_price, simulated=True)

        return estimate

    def build_descriptor(
        self,
        prior: Sequence[TransactionDescriptor],
        binding: ContractBinding,
        method: str,
        args: Tuple[Any, ...],
        from_address: str,
        tx_type: EthereumTxType,
        action: ProtocolAction = ProtocolAction.DEFAULT
    ) -> TransactionDescriptor:
        """Wire a tx callback and its gas estimator into one descriptor."""
        tx_callback = self.generate_tx_callback(binding, method, args, from_address, tx_type)
        return TransactionDescriptor(
            tx_type=tx_type,
            from_address=from_address,
            tx=tx_callback,
            gas=self.generate_gas_estimation(prior, tx_callback, tx_type, action)
        )
