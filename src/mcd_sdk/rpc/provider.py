"""JSON-RPC provider for Ethereum nodes."""

import asyncio
import logging
from typing import Optional, Any
import aiohttp
from aiohttp import ClientTimeout, ClientError

from ..core.config import McdConfig
from ..core.types import RPCRequest, RPCResponse
from ..core.exceptions import (
    RPCError,
    ExecutionRevertedError,
    NetworkError,
    TimeoutError as SDKTimeoutError,
    RateLimitError
)

logger = logging.getLogger(__name__)

# Geth reports reverts with code 3; other nodes use -32000 with a "revert" message
REVERT_ERROR_CODE = 3


def _from_hex(value: Any, method: str) -> int:
    """Parse a hex quantity result; anything else is a malformed response."""
    if not isinstance(value, str):
        raise RPCError(
            f"Unexpected {method} result: {value!r}",
            method=method,
            response_data=value
        )
    try:
        return int(value, 16)
    except ValueError as e:
        raise RPCError(
            f"Invalid hex quantity from {method}: {value!r}",
            method=method,
            response_data=value
        ) from e


class JsonRpcProvider:
    """Async read/simulate-only JSON-RPC client. Never signs or sends."""

    def __init__(self, config: McdConfig):
        """Initialize the provider.

        Args:
            config: MCD configuration containing the RPC URL and transport settings
        """
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None
        self._closed = False
        self._request_id = 0

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self):
        """Ensure aiohttp session is created."""
        if self.session is None or self.session.closed:
            timeout = ClientTimeout(total=self.config.request_timeout)
            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers={
                    'Content-Type': 'application/json',
                    'User-Agent': 'MCD-Python-SDK/0.1.0'
                }
            )

    async def close(self):
        """Close the HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()
        self._closed = True

    async def _make_rpc_call(
        self,
        method: str,
        params: list,
        timeout: Optional[float] = None
    ) -> Any:
        """Make a JSON-RPC call, retrying transport failures only.

        Args:
            method: RPC method name
            params: RPC parameters
            timeout: Request timeout override

        Returns:
            RPC result data

        Raises:
            RPCError: RPC call failed
            ExecutionRevertedError: The simulated call reverted
            NetworkError: Network connectivity issues
            TimeoutError: Request timed out
        """
        if self._closed:
            raise RuntimeError("Provider has been closed")

        await self._ensure_session()

        self._request_id += 1
        request = RPCRequest(
            id=self._request_id,
            method=method,
            params=params
        )

        last_exception = None

        for attempt in range(self.config.max_retries + 1):
            try:
                logger.debug(f"RPC call attempt {attempt + 1}: {method}")

                async with self.session.post(
                    self.config.rpc_url,
                    json=request.model_dump(),
                    timeout=ClientTimeout(total=timeout or self.config.request_timeout)
                ) as response:

                    if response.status == 429:
                        retry_after = int(response.headers.get('Retry-After', 60))
                        raise RateLimitError(
                            "Rate limit exceeded",
                            retry_after=retry_after,
                            details={'status_code': response.status, 'method': method}
                        )

                    if response.status >= 400:
                        error_text = await response.text()
                        raise RPCError(
                            f"HTTP {response.status}: {error_text}",
                            method=method,
                            status_code=response.status,
                            response_data=error_text
                        )

                    try:
                        json_data = await response.json()
                    except Exception as e:
                        raise RPCError(
                            f"Failed to parse JSON response: {e}",
                            method=method,
                            status_code=response.status
                        )

                    try:
                        rpc_response = RPCResponse(**json_data)
                    except Exception as e:
                        raise RPCError(
                            f"Invalid RPC response format: {e}",
                            method=method,
                            response_data=json_data
                        )

                    if rpc_response.error:
                        error = rpc_response.error
                        error_code = error.get('code', -1)
                        error_message = error.get('message', 'Unknown RPC error')

                        if error_code == REVERT_ERROR_CODE or 'revert' in error_message.lower():
                            raise ExecutionRevertedError(
                                error_message,
                                method=method,
                                code=error_code,
                                response_data=error.get('data'),
                                details={'rpc_error': error}
                            )
                        raise RPCError(
                            f"RPC error {error_code}: {error_message}",
                            method=method,
                            code=error_code,
                            response_data=error.get('data'),
                            details={'rpc_error': error}
                        )

                    return rpc_response.result

            except (ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                if attempt < self.config.max_retries:
                    delay = self.config.retry_delay * (2 ** attempt)
                    logger.warning(f"RPC call {method} failed, retrying in {delay}s: {e}")
                    await asyncio.sleep(delay)
                    continue
                break

        if isinstance(last_exception, asyncio.TimeoutError):
            raise SDKTimeoutError(
                f"RPC call {method} timed out after {self.config.max_retries + 1} attempts",
                timeout_duration=self.config.request_timeout
            )
        raise NetworkError(
            f"Network error on {method} after {self.config.max_retries + 1} attempts: {last_exception}"
        )

    async def call(
        self,
        to: str,
        data: str,
        from_address: Optional[str] = None,
        block: str = "latest"
    ) -> bytes:
        """Execute a read-only eth_call.

        Args:
            to: Contract address
            data: 0x-prefixed calldata
            from_address: Optional caller address
            block: Block tag

        Returns:
            Raw return data
        """
        tx = {'to': to, 'data': data}
        if from_address:
            tx['from'] = from_address

        result = await self._make_rpc_call('eth_call', [tx, block])
        if not isinstance(result, str):
            raise RPCError(
                f"Unexpected eth_call result: {result!r}",
                method='eth_call',
                response_data=result
            )
        return bytes.fromhex(result[2:] if result.startswith('0x') else result)

    async def estimate_gas(self, tx: dict) -> int:
        """Simulate a transaction and return its gas usage.

        Args:
            tx: Transaction object in JSON-RPC form (hex quantities)
        """
        result = await self._make_rpc_call('eth_estimateGas', [tx])
        return _from_hex(result, 'eth_estimateGas')

    async def get_gas_price(self) -> int:
        """Get the current gas price in wei."""
        result = await self._make_rpc_call('eth_gasPrice', [])
        return _from_hex(result, 'eth_gasPrice')

    async def get_chain_id(self) -> int:
        """Get the chain id reported by the node."""
        result = await self._make_rpc_call('eth_chainId', [])
        return _from_hex(result, 'eth_chainId')
