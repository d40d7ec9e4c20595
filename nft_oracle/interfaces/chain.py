"""Chain client protocol — blockchain RPC abstraction."""
from typing import Any, Protocol, Sequence


class ChainClient(Protocol):
    """Abstract interface for read-only smart contract calls."""

    async def call(
        self, contract_address: str, function_signature: str, args: Sequence[Any] = ()
    ) -> Any: ...
