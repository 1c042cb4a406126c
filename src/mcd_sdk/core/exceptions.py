"""Custom exceptions for the MCD SDK."""

from enum import Enum
from typing import Optional, Any, Dict


class ValidationReason(str, Enum):
    """Reason codes carried by ValidationError."""
    INVALID_ADDRESS = "invalid_address"
    INVALID_AMOUNT = "invalid_amount"
    NON_POSITIVE_AMOUNT = "non_positive_amount"
    INVALID_DECIMALS = "invalid_decimals"
    INVALID_NAME = "invalid_name"


class McdSDKError(Exception):
    """Base exception for all MCD SDK errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(McdSDKError):
    """Configuration is invalid or missing."""
    pass


class ValidationError(McdSDKError):
    """Input validation failed before any network call was made."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        reason: Optional[ValidationReason] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.reason = reason


class InvalidAmountError(ValidationError):
    """Amount is not a valid non-negative decimal numeral."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = "amount",
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message,
            field=field,
            value=value,
            reason=ValidationReason.INVALID_AMOUNT,
            details=details
        )


class ResolutionError(McdSDKError):
    """Registry lookup failed or the name is unknown."""

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.name = name


class GasEstimationError(McdSDKError):
    """Gas simulation reverted or failed."""

    def __init__(
        self,
        message: str,
        tx_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.tx_type = tx_type


class RPCError(McdSDKError):
    """RPC call failed."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        response_data: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.method = method
        self.status_code = status_code
        self.code = code
        self.response_data = response_data


class ExecutionRevertedError(RPCError):
    """The node reported that the simulated call reverted."""
    pass


class NetworkError(McdSDKError):
    """Network connectivity issues."""
    pass


class TimeoutError(McdSDKError):
    """Operation timed out."""

    def __init__(
        self,
        message: str,
        timeout_duration: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.timeout_duration = timeout_duration


class RateLimitError(RPCError):
    """Rate limit exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details=details)
        self.retry_after = retry_after
