"""Test configuration and fakes for MCD SDK."""

import logging
import sys
from typing import Any, Callable, Dict, List, Tuple
from unittest.mock import AsyncMock

import pytest
from eth_abi import decode as abi_decode, encode as abi_encode

from mcd_sdk.contracts.abis import CHAINLOG_ABI, ERC20_ABI, PSM_ABI, POT_ABI, SAVINGS_DAI_ABI
from mcd_sdk.contracts.binding import ContractBinding
from mcd_sdk.core.config import McdConfig
from mcd_sdk.core.exceptions import ExecutionRevertedError

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Suppress noisy logs during testing
logging.getLogger('aiohttp').setLevel(logging.WARNING)

# Test addresses for consistent testing
TEST_ADDRESSES = {
    'chainlog': '0xda0ab1e0017debcd72be8599041a2aa3ba7e740f',
    'user': '0x1111111111111111111111111111111111111111',
    'receiver': '0x2222222222222222222222222222222222222222',
    'dai': '0x3333333333333333333333333333333333333333',
    'gem': '0x4444444444444444444444444444444444444444',
    'psm': '0x5555555555555555555555555555555555555555',
    'gem_join': '0x6666666666666666666666666666666666666666',
    'savings_dai': '0x7777777777777777777777777777777777777777',
    'pot': '0x8888888888888888888888888888888888888888',
}

ZERO_ADDRESS = '0x' + '0' * 40


class FakeProvider:
    """
    In-memory stand-in for JsonRpcProvider.

    ``on(address, abi, method, result)`` registers a read handler; ``result``
    is either a value or a callable taking the decoded call arguments.
    Returning an exception instance raises it. Unregistered calls revert.
    """

    def __init__(self):
        self._handlers: Dict[Tuple[str, bytes], Tuple[Any, Any]] = {}
        self.calls: List[Tuple[str, str, tuple]] = []
        self.estimate_gas = AsyncMock(return_value=100000)
        self.get_gas_price = AsyncMock(return_value=20 * 10 ** 9)

    def on(self, address: str, abi: list, method: str, result: Any) -> None:
        fn = ContractBinding.from_abi(address, abi).function(method)
        self._handlers[(address.lower(), fn.selector)] = (fn, result)

    def calls_to(self, method: str) -> List[tuple]:
        return [args for _, name, args in self.calls if name == method]

    async def call(self, to: str, data: str, from_address=None, block="latest") -> bytes:
        raw = bytes.fromhex(data[2:])
        handler = self._handlers.get((to.lower(), raw[:4]))
        if handler is None:
            raise ExecutionRevertedError("execution reverted", method='eth_call', code=3)

        fn, result = handler
        args = abi_decode(list(fn.inputs), raw[4:]) if fn.inputs else ()
        self.calls.append((to, fn.name, tuple(args)))

        value = result(*args) if callable(result) else result
        if isinstance(value, Exception):
            raise value
        values = [value] if len(fn.outputs) == 1 else list(value)
        return abi_encode(list(fn.outputs), values)


def chainlog_lookup(names: Dict[str, str]) -> Callable[[bytes], str]:
    """Chainlog ``getAddress`` handler backed by a name -> address dict."""
    def lookup(key: bytes) -> str:
        return names.get(key.rstrip(b'\x00').decode('utf-8'), ZERO_ADDRESS)
    return lookup


@pytest.fixture
def config():
    """Test configuration."""
    return McdConfig(
        rpc_url="https://rpc.example.org",
        chainlog_address=TEST_ADDRESSES['chainlog'],
        savings_dai_address=TEST_ADDRESSES['savings_dai'],
        pot_address=TEST_ADDRESSES['pot'],
        chain_id=1,
        request_timeout=5.0,
        max_retries=2,
        retry_delay=0.1
    )


@pytest.fixture
def addresses():
    """Test addresses."""
    return TEST_ADDRESSES


@pytest.fixture
def provider():
    """Empty fake provider."""
    return FakeProvider()


@pytest.fixture
def chainlog_names():
    """Names registered in the fake chainlog."""
    return {
        'MCD_DAI': TEST_ADDRESSES['dai'],
        'USDC': TEST_ADDRESSES['gem'],
        'MCD_PSM_USDC_A': TEST_ADDRESSES['psm'],
    }


@pytest.fixture
def mcd_provider(provider, chainlog_names):
    """
    Fake provider wired with a chainlog, a 6-decimal gem, 18-decimal Dai,
    a PSM, an sDAI vault and a Pot. Allowances default to zero.
    """
    provider.on(TEST_ADDRESSES['chainlog'], CHAINLOG_ABI, 'getAddress', chainlog_lookup(chainlog_names))

    provider.on(TEST_ADDRESSES['gem'], ERC20_ABI, 'decimals', 6)
    provider.on(TEST_ADDRESSES['gem'], ERC20_ABI, 'allowance', 0)
    provider.on(TEST_ADDRESSES['dai'], ERC20_ABI, 'decimals', 18)
    provider.on(TEST_ADDRESSES['dai'], ERC20_ABI, 'allowance', 0)

    provider.on(TEST_ADDRESSES['psm'], PSM_ABI, 'gemJoin', TEST_ADDRESSES['gem_join'])
    provider.on(TEST_ADDRESSES['psm'], PSM_ABI, 'tin', 0)
    provider.on(TEST_ADDRESSES['psm'], PSM_ABI, 'tout', 0)

    provider.on(TEST_ADDRESSES['savings_dai'], SAVINGS_DAI_ABI, 'dai', TEST_ADDRESSES['dai'])
    provider.on(TEST_ADDRESSES['savings_dai'], SAVINGS_DAI_ABI, 'decimals', 18)

    provider.on(TEST_ADDRESSES['pot'], POT_ABI, 'chi', 10 ** 27)
    provider.on(TEST_ADDRESSES['pot'], POT_ABI, 'dsr', 10 ** 27)
    return provider
