"""Protocol interfaces for the NFT ownership oracle."""
from .chain import ChainClient
from .metadata import MetadataFetcher
from .validator import TokenValidator

__all__ = ["ChainClient", "MetadataFetcher", "TokenValidator"]
