"""
Core module for MCD SDK.

This module contains the fundamental types, configuration, exceptions,
amount conversion and parameter validation shared by every service.
"""

from .config import McdConfig
from .types import (
    EthereumTxType,
    ProtocolAction,
    PsmParams,
    DepositParams,
    RedeemParams,
    RawTransaction,
    GasEstimate,
    RPCRequest,
    RPCResponse,
    DEFAULT_NULL_VALUE_ON_TX,
)
from .exceptions import (
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
from .amounts import (
    MAX_ALLOWANCE,
    WAD,
    RAY,
    SECONDS_PER_YEAR,
    to_base_units,
    from_base_units,
    rescale,
    from_wad,
    from_ray,
    annualize_rate,
)
from .cache import ResolveOnceCache
from .validators import (
    validate_address,
    validate_amount,
    validate_psm_params,
    validate_deposit_params,
    validate_redeem_params,
)

__all__ = [
    # Configuration
    "McdConfig",

    # Core types
    "EthereumTxType",
    "ProtocolAction",
    "PsmParams",
    "DepositParams",
    "RedeemParams",
    "RawTransaction",
    "GasEstimate",
    "RPCRequest",
    "RPCResponse",
    "DEFAULT_NULL_VALUE_ON_TX",

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

    # Amounts
    "MAX_ALLOWANCE",
    "WAD",
    "RAY",
    "SECONDS_PER_YEAR",
    "to_base_units",
    "from_base_units",
    "rescale",
    "from_wad",
    "from_ray",
    "annualize_rate",

    # Caching
    "ResolveOnceCache",

    # Validation
    "validate_address",
    "validate_amount",
    "validate_psm_params",
    "validate_deposit_params",
    "validate_redeem_params",
]
