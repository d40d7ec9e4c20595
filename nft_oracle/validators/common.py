"""Helpers shared by the collection validators."""
from __future__ import annotations

from ..interfaces.chain import ChainClient

BALANCE_OF = "function balanceOf(address owner) view returns (uint256)"


def addresses_equal(a: str, b: str) -> bool:
    """Compare two hex addresses. EIP-55 mixed case is a checksum, not identity."""
    return a.strip().lower() == b.strip().lower()


async def balance_of(client: ChainClient, contract_address: str, owner: str) -> int:
    """Number of tokens ``owner`` holds. Chain errors propagate."""
    return int(await client.call(contract_address, BALANCE_OF, [owner]))
