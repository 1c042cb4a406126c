"""Transaction building functionality for the MCD SDK."""

from .builder import (
    GAS_LIMIT_RECOMMENDATIONS,
    TransactionBatch,
    TransactionBuilder,
    TransactionDescriptor,
)

__all__ = [
    "GAS_LIMIT_RECOMMENDATIONS",
    "TransactionBatch",
    "TransactionBuilder",
    "TransactionDescriptor",
]
