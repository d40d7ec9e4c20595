"""Metadata fetcher protocol — off-chain token metadata resolution."""
from typing import Any, Protocol


class MetadataFetcher(Protocol):
    """Abstract interface for resolving a token URI to decoded JSON."""

    async def fetch_json(self, uri: str) -> Any: ...
