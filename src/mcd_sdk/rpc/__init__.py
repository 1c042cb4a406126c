"""JSON-RPC transport for the MCD SDK."""

from .provider import JsonRpcProvider

__all__ = [
    "JsonRpcProvider",
]
