"""Ethereum JSON-RPC client with fallback support."""
import logging
import ssl
from typing import Any, Sequence

import aiohttp
import certifi

from ...config import ChainConfig
from ...errors import ContractRevertError, RpcTransportError
from .abi import parse_function

logger = logging.getLogger(__name__)


class EthereumClient:
    """Ethereum RPC client with automatic endpoint fallback."""

    def __init__(self, config: ChainConfig) -> None:
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make RPC call with fallback to alternative endpoints.

        A JSON-RPC ``error`` member is the node's deterministic answer (for
        ``eth_call`` usually a revert) and is raised as ContractRevertError
        without trying other endpoints.
        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        if response.status != 200:
                            raise RuntimeError(f"HTTP {response.status}")
                        result = await response.json(content_type=None)
                        if not isinstance(result, dict):
                            raise RuntimeError(f"Malformed RPC response: {result!r}")
            except Exception as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

            if rpc_index != self.current_rpc_index:
                logger.info("Switched to RPC endpoint: %s", rpc_url)
                self.current_rpc_index = rpc_index

            if "error" in result:
                raise ContractRevertError(f"RPC Error: {result['error']}")
            return result.get("result")

        raise RpcTransportError(f"All RPC endpoints failed. Last error: {last_error}")

    async def call(
        self, contract_address: str, function_signature: str, args: Sequence[Any] = ()
    ) -> Any:
        """Run a read-only contract call against the latest block and decode it."""
        function = parse_function(function_signature)
        data = function.encode_call(args)

        logger.debug("eth_call %s.%s%s", contract_address, function.name, tuple(args))
        result = await self.rpc_call(
            "eth_call", [{"to": contract_address, "data": data}, "latest"]
        )
        if not isinstance(result, str):
            raise ContractRevertError(
                f"Unexpected eth_call result for {function.signature}: {result!r}"
            )
        return function.decode_result(result)
