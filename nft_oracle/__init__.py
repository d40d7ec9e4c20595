"""Read-only NFT ownership oracle over an Ethereum JSON-RPC endpoint."""

__version__ = "0.1.0"
