"""
Stateless contract bindings: an address plus the ABI needed to talk to it.

A binding only encodes and decodes. Network access goes through the provider
passed to ``call_contract`` so the same binding can be shared freely.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from eth_abi import decode as abi_decode, encode as abi_encode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak, to_checksum_address

from ..core.exceptions import RPCError
from ..core.types import RawTransaction, DEFAULT_NULL_VALUE_ON_TX


@dataclass(frozen=True)
class AbiFunction:
    """A single ABI function entry."""
    name: str
    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return keccak(text=self.signature)[:4]


def parse_abi(abi: List[Dict[str, Any]]) -> Dict[str, AbiFunction]:
    """Index the function entries of an ABI by name."""
    functions: Dict[str, AbiFunction] = {}
    for entry in abi:
        if entry.get("type") != "function":
            continue
        functions[entry["name"]] = AbiFunction(
            name=entry["name"],
            inputs=tuple(inp["type"] for inp in entry.get("inputs", [])),
            outputs=tuple(out["type"] for out in entry.get("outputs", [])),
        )
    return functions


def _normalize_output(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return to_checksum_address(value)
    return value


@dataclass(frozen=True)
class ContractBinding:
    """Address + ABI metadata for one deployed contract."""
    address: str
    functions: Dict[str, AbiFunction] = field(compare=False, hash=False)

    @classmethod
    def from_abi(cls, address: str, abi: List[Dict[str, Any]]) -> 'ContractBinding':
        return cls(address=to_checksum_address(address), functions=parse_abi(abi))

    def function(self, method: str) -> AbiFunction:
        try:
            return self.functions[method]
        except KeyError:
            raise ValueError(f"Function {method} not found in ABI for {self.address}")

    def encode(self, method: str, *args: Any) -> str:
        """Encode calldata: selector + ABI-encoded arguments, 0x-prefixed."""
        fn = self.function(method)
        encoded = abi_encode(list(fn.inputs), list(args)) if fn.inputs else b""
        return "0x" + (fn.selector + encoded).hex()

    def decode(self, method: str, data: bytes) -> Any:
        """Decode return data; a single output is unwrapped."""
        fn = self.function(method)
        values = abi_decode(list(fn.outputs), data)
        values = tuple(_normalize_output(t, v) for t, v in zip(fn.outputs, values))
        return values[0] if len(values) == 1 else values

    def populate_transaction(
        self,
        method: str,
        args: Tuple[Any, ...],
        from_address: str,
        value: int = DEFAULT_NULL_VALUE_ON_TX
    ) -> RawTransaction:
        """Encode a state-changing call without sending it."""
        return RawTransaction(
            to=self.address,
            from_address=from_address,
            data=self.encode(method, *args),
            value=value
        )


async def call_contract(provider, binding: ContractBinding, method: str, *args: Any) -> Any:
    """Run a read-only call and decode its result.

    Provider errors propagate unchanged. Return data that does not decode
    (e.g. ``0x`` from an address without code) raises RPCError naming the
    contract and method.
    """
    raw = await provider.call(binding.address, binding.encode(method, *args))
    try:
        return binding.decode(method, raw)
    except DecodingError as e:
        raise RPCError(
            f"Could not decode {method} result from {binding.address}: {e}",
            method=method,
            response_data='0x' + bytes(raw).hex(),
            details={'address': binding.address}
        ) from e
