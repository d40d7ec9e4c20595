"""Exception hierarchy for the NFT ownership oracle."""
from __future__ import annotations


class NftOracleError(Exception):
    """Base class for all errors raised by this package."""


class UnsupportedCollectionError(NftOracleError):
    """The requested collection identifier is not in the registry."""

    def __init__(self, collection: str) -> None:
        super().__init__(f"Unsupported NFT collection: {collection!r}")
        self.collection = collection


class InvalidQueryError(NftOracleError, ValueError):
    """Query arguments cannot be encoded for the contract (bad address or token id)."""


class ChainCallError(NftOracleError):
    """A read-only contract call could not be completed."""


class ContractRevertError(ChainCallError):
    """The node rejected the call or returned data that could not be decoded."""


class RpcTransportError(ChainCallError):
    """Every configured RPC endpoint failed at the transport level."""


class MetadataError(NftOracleError):
    """Off-chain token metadata could not be resolved or parsed."""
