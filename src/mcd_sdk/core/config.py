"""Configuration management for MCD SDK."""

import os
from dataclasses import dataclass
from typing import Any, Callable

from .exceptions import ConfigurationError


def _env(name: str, default: Any, cast: Callable[[str], Any] = str) -> Any:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value for {name}: {raw!r}",
            details={'variable': name}
        ) from e


@dataclass(frozen=True)
class McdConfig:
    """Configuration for MCD SDK."""
    rpc_url: str
    chainlog_address: str
    savings_dai_address: str
    pot_address: str
    chain_id: int = 1
    request_timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    gas_surplus: int = 30  # percent added on top of eth_estimateGas

    @classmethod
    def from_env(cls) -> 'McdConfig':
        """Load configuration from environment variables, falling back to mainnet."""
        mainnet = cls.mainnet()
        return cls(
            rpc_url=_env('MCD_RPC_URL', mainnet.rpc_url),
            chainlog_address=_env('MCD_CHAINLOG_ADDRESS', mainnet.chainlog_address),
            savings_dai_address=_env('MCD_SAVINGS_DAI_ADDRESS', mainnet.savings_dai_address),
            pot_address=_env('MCD_POT_ADDRESS', mainnet.pot_address),
            chain_id=_env('CHAIN_ID', mainnet.chain_id, int),
            request_timeout=_env('REQUEST_TIMEOUT', mainnet.request_timeout, float),
            max_retries=_env('MAX_RETRIES', mainnet.max_retries, int),
            retry_delay=_env('RETRY_DELAY', mainnet.retry_delay, float),
            gas_surplus=_env('GAS_SURPLUS', mainnet.gas_surplus, int)
        )

    @classmethod
    def mainnet(cls) -> 'McdConfig':
        """Ethereum mainnet configuration."""
        return cls(
            rpc_url="https://eth.llamarpc.com",
            chainlog_address="0xdA0Ab1e0017DEbCd72Be8599041a2aa3bA7e740F",
            savings_dai_address="0x83F20F44975D03b1b09e64809B757c47f942BEeA",
            pot_address="0x197E90f9FAD81970bA7976f33CbD77088E5D7cf7",
            chain_id=1
        )
