"""
Parameter validation for action builders.

Every builder calls one of these functions before touching the network.
They either return normalised, typed parameters or raise a ValidationError
naming the offending field.
"""

from typing import Any

from eth_utils import is_checksum_address, is_hex_address, to_checksum_address

from .amounts import is_valid_amount
from .exceptions import InvalidAmountError, ValidationError, ValidationReason
from .types import PsmParams, DepositParams, RedeemParams


def validate_address(value: Any, field: str = "address") -> str:
    """
    Validate an Ethereum address and return its checksum form.

    Mixed-case input must carry a valid EIP-55 checksum; all-lower or
    all-upper hex is accepted and normalised.

    Raises:
        ValidationError: If the address is malformed
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"Invalid {field}: address must be a string",
            field=field,
            value=value,
            reason=ValidationReason.INVALID_ADDRESS
        )

    if not value.startswith('0x') or len(value) != 42 or not is_hex_address(value):
        raise ValidationError(
            f"Invalid {field}: {value}",
            field=field,
            value=value,
            reason=ValidationReason.INVALID_ADDRESS
        )

    body = value[2:]
    if body != body.lower() and body != body.upper() and not is_checksum_address(value):
        raise ValidationError(
            f"Invalid {field}: bad EIP-55 checksum: {value}",
            field=field,
            value=value,
            reason=ValidationReason.INVALID_ADDRESS
        )

    return to_checksum_address(value)


def validate_amount(value: Any, field: str = "amount", allow_zero: bool = False) -> str:
    """
    Validate a human decimal amount.

    Raises:
        InvalidAmountError: Not a decimal numeral
        ValidationError: Zero when ``allow_zero`` is False
    """
    if not is_valid_amount(value):
        raise InvalidAmountError(
            f"Invalid {field}: must be a non-negative decimal string",
            field=field,
            value=value
        )

    if not allow_zero and not any(c not in "0." for c in value):
        raise ValidationError(
            f"Invalid {field}: amount must be positive",
            field=field,
            value=value,
            reason=ValidationReason.NON_POSITIVE_AMOUNT
        )

    return value


def validate_psm_params(user_address: Any, usr: Any, gem_amt: Any) -> PsmParams:
    """Validate PSM buy/sell arguments."""
    return PsmParams(
        user_address=validate_address(user_address, "user_address"),
        usr=validate_address(usr, "usr"),
        gem_amt=validate_amount(gem_amt, "gem_amt")
    )


def validate_deposit_params(user_address: Any, receiver: Any, assets: Any) -> DepositParams:
    """Validate savings Dai deposit arguments."""
    return DepositParams(
        user_address=validate_address(user_address, "user_address"),
        receiver=validate_address(receiver, "receiver"),
        assets=validate_amount(assets, "assets")
    )


def validate_redeem_params(
    user_address: Any,
    receiver: Any,
    owner: Any,
    shares: Any
) -> RedeemParams:
    """Validate savings Dai redeem arguments."""
    return RedeemParams(
        user_address=validate_address(user_address, "user_address"),
        receiver=validate_address(receiver, "receiver"),
        owner=validate_address(owner, "owner"),
        shares=validate_amount(shares, "shares")
    )
