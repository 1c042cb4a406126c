"""Contract services and action builders for the MCD SDK."""

from .registry import AddressRegistry, format_bytes32_string
from .erc20 import Erc20Service
from .allowance import AllowanceGate
from .psm import PsmService, PsmContracts
from .savings_dai import SavingsDaiService
from .pot import PotService

__all__ = [
    "AddressRegistry",
    "format_bytes32_string",
    "Erc20Service",
    "AllowanceGate",
    "PsmService",
    "PsmContracts",
    "SavingsDaiService",
    "PotService",
]
