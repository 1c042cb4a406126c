"""Chainlog-backed address registry."""

import logging
from typing import Optional

from ..contracts.abis import CHAINLOG_ABI
from ..contracts.binding import ContractBinding, call_contract
from ..core.cache import ResolveOnceCache
from ..core.exceptions import McdSDKError, ResolutionError, ValidationError, ValidationReason

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def format_bytes32_string(name: str) -> bytes:
    """
    Encode a name as a null-terminated bytes32 key.

    Raises:
        ValidationError: Empty name, or longer than 31 UTF-8 bytes
    """
    if not isinstance(name, str) or not name:
        raise ValidationError(
            "Registry name must be a non-empty string",
            field="name",
            value=name,
            reason=ValidationReason.INVALID_NAME
        )
    encoded = name.encode("utf-8")
    if len(encoded) > 31:
        raise ValidationError(
            f"Registry name too long for bytes32: {name}",
            field="name",
            value=name,
            reason=ValidationReason.INVALID_NAME
        )
    return encoded.ljust(32, b"\x00")


class AddressRegistry:
    """Resolves logical names (e.g. ``MCD_DAI``) to contract addresses.

    Each name is looked up at most once per registry instance and the result
    is kept for its lifetime.
    """

    def __init__(self, provider, chainlog_address: str):
        self.provider = provider
        self.chainlog = ContractBinding.from_abi(chainlog_address, CHAINLOG_ABI)
        self._cache: ResolveOnceCache[str] = ResolveOnceCache()

    def cached(self, name: str) -> Optional[str]:
        """Return an already resolved address, without any I/O."""
        return self._cache.get(name)

    async def resolve(self, name: str) -> str:
        """Resolve ``name`` through the chainlog.

        Raises:
            ValidationError: Name cannot be encoded as bytes32
            ResolutionError: Lookup failed or the name is unknown
        """
        key = format_bytes32_string(name)
        return await self._cache.get_or_fetch(name, lambda: self._lookup(name, key))

    async def _lookup(self, name: str, key: bytes) -> str:
        logger.debug(f"Resolving {name} via chainlog {self.chainlog.address}")
        try:
            address = await call_contract(self.provider, self.chainlog, "getAddress", key)
        except McdSDKError as e:
            raise ResolutionError(
                f"Failed to resolve {name}: {e}",
                name=name,
                details={'chainlog': self.chainlog.address}
            ) from e

        if int(address, 16) == 0:
            raise ResolutionError(f"Name {name} is not registered", name=name)

        logger.info(f"Resolved {name} -> {address}")
        return address
