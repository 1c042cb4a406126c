"""
MCD SDK for Python

Builds ready-to-send transaction batches for Maker Multi-Collateral Dai
contracts (PSM, savings Dai, Pot, Chainlog). Transactions are encoded and
gas-estimated on demand; nothing is ever signed or sent.
"""

__version__ = "0.1.0"

# Core configuration and types
from .core.config import McdConfig
from .core.types import (
    EthereumTxType,
    ProtocolAction,
    RawTransaction,
    GasEstimate,
)

# Amount conversion
from .core.amounts import (
    MAX_ALLOWANCE,
    to_base_units,
    from_base_units,
    annualize_rate,
)

# Transport
from .rpc.provider import JsonRpcProvider

# Contract bindings
from .contracts.binding import ContractBinding, call_contract

# Transaction building
from .transactions.builder import (
    TransactionBuilder,
    TransactionDescriptor,
    TransactionBatch,
)

# Services
from .services.registry import AddressRegistry
from .services.erc20 import Erc20Service
from .services.allowance import AllowanceGate
from .services.psm import PsmService
from .services.savings_dai import SavingsDaiService
from .services.pot import PotService

# Exceptions
from .core.exceptions import (
    McdSDKError,
    ConfigurationError,
    ValidationError,
    ValidationReason,
    InvalidAmountError,
    ResolutionError,
    GasEstimationError,
    RPCError,
    ExecutionRevertedError,
    NetworkError,
    TimeoutError,
    RateLimitError,
)

# Main exports for public API
__all__ = [
    # Version info
    "__version__",

    # Configuration
    "McdConfig",

    # Core types
    "EthereumTxType",
    "ProtocolAction",
    "RawTransaction",
    "GasEstimate",

    # Amounts
    "MAX_ALLOWANCE",
    "to_base_units",
    "from_base_units",
    "annualize_rate",

    # Transport and bindings
    "JsonRpcProvider",
    "ContractBinding",
    "call_contract",

    # Transaction building
    "TransactionBuilder",
    "TransactionDescriptor",
    "TransactionBatch",

    # Services
    "AddressRegistry",
    "Erc20Service",
    "AllowanceGate",
    "PsmService",
    "SavingsDaiService",
    "PotService",

    # Exceptions
    "McdSDKError",
    "ConfigurationError",
    "ValidationError",
    "ValidationReason",
    "InvalidAmountError",
    "ResolutionError",
    "GasEstimationError",
    "RPCError",
    "ExecutionRevertedError",
    "NetworkError",
    "TimeoutError",
    "RateLimitError",
]
