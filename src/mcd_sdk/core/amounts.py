"""
Amount conversion between human decimal strings and on-chain base units.

All conversions are string/integer based so no float rounding can leak into
an amount that ends up in calldata.
"""

import re
from decimal import Decimal, localcontext

from .exceptions import InvalidAmountError, ValidationError, ValidationReason

# Unlimited approval, uint256 max
MAX_ALLOWANCE = 2 ** 256 - 1

WAD = 10 ** 18
RAY = 10 ** 27

SECONDS_PER_YEAR = 60 * 60 * 24 * 365

# Significant digits used for compounding a per-second rate over a year
RATE_PRECISION = 100

# ASCII digits only; fullmatch so a trailing newline is rejected
_AMOUNT_RE = re.compile(r'([0-9]+)(?:\.([0-9]+))?', re.ASCII)


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= 255:
        raise ValidationError(
            f"Decimals must be an integer between 0 and 255: {decimals}",
            field="decimals",
            value=decimals,
            reason=ValidationReason.INVALID_DECIMALS
        )


def is_valid_amount(amount: str) -> bool:
    """Check whether ``amount`` is a non-negative decimal numeral."""
    return isinstance(amount, str) and _AMOUNT_RE.fullmatch(amount) is not None


def to_base_units(amount: str, decimals: int, field: str = "amount") -> int:
    """
    Convert a human amount into integer base units.

    Fractional digits beyond ``decimals`` are discarded, never rounded,
    so "1.9999999" with 6 decimals becomes 1999999.

    Args:
        amount: Decimal string such as "100" or "0.25"
        decimals: Token decimal precision (0-255)
        field: Parameter name reported on failure

    Returns:
        Amount in base units

    Raises:
        InvalidAmountError: If amount is not a valid non-negative numeral
        ValidationError: If decimals is out of range
    """
    _check_decimals(decimals)

    match = _AMOUNT_RE.fullmatch(amount) if isinstance(amount, str) else None
    if match is None:
        raise InvalidAmountError(
            f"Amount must be a non-negative decimal string: {amount!r}",
            field=field,
            value=amount
        )

    whole, fraction = match.group(1), match.group(2) or ""
    fraction = fraction[:decimals].ljust(decimals, "0")
    return int(whole + fraction)


def rescale(value: int, from_decimals: int, to_decimals: int) -> int:
    """Re-denominate a base-unit amount, truncating when precision drops."""
    _check_decimals(from_decimals)
    _check_decimals(to_decimals)
    if to_decimals >= from_decimals:
        return value * 10 ** (to_decimals - from_decimals)
    return value // 10 ** (from_decimals - to_decimals)


def from_base_units(value: int, decimals: int) -> Decimal:
    """Convert base units back into an exact Decimal."""
    _check_decimals(decimals)
    # Built from the digit tuple so no context precision applies
    sign, digits, _ = Decimal(value).as_tuple()
    return Decimal((sign, digits, -decimals))


def from_wad(value: int) -> Decimal:
    """Fixed-point 18-decimal integer to Decimal."""
    return from_base_units(value, 18)


def from_ray(value: int) -> Decimal:
    """Fixed-point 27-decimal integer to Decimal."""
    return from_base_units(value, 27)


def annualize_rate(rate_ray: int, seconds: int = SECONDS_PER_YEAR) -> Decimal:
    """
    Compound a per-second ray rate over ``seconds`` and return the yield.

    Computes ``(rate_ray / 1e27) ** seconds - 1`` with 100 significant
    digits; floating point would lose the result entirely over ~31.5M
    compounding steps.
    """
    with localcontext() as ctx:
        ctx.prec = RATE_PRECISION
        per_second = Decimal(rate_ray) / Decimal(RAY)
        return per_second ** seconds - 1
