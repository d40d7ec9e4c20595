"""Validator for any ERC-721 compliant collection contract."""
from __future__ import annotations

import logging
from typing import Any

from ..interfaces.chain import ChainClient
from ..interfaces.metadata import MetadataFetcher
from .common import addresses_equal, balance_of

logger = logging.getLogger(__name__)

OWNER_OF = "function ownerOf(uint256 tokenId) external view returns (address)"
TOKEN_URI = "function tokenURI(uint256 _tokenId) external view returns (string)"


class ERC721Validator:
    """Answer ownership and metadata questions through the ERC-721 interface."""

    def __init__(
        self,
        contract_address: str,
        chain_client: ChainClient,
        metadata_fetcher: MetadataFetcher,
    ) -> None:
        self._contract_address = contract_address
        self._client = chain_client
        self._fetcher = metadata_fetcher

    @property
    def contract_address(self) -> str:
        return self._contract_address

    async def owns_any(self, address: str) -> bool:
        return await balance_of(self._client, self._contract_address, address) > 0

    async def owns_token(self, address: str, token_id: str) -> bool:
        # ownerOf reverts for tokens that were never minted or were burned
        try:
            owner = await self._client.call(self._contract_address, OWNER_OF, [token_id])
        except Exception as e:
            logger.debug(
                "ownerOf(%s) on %s failed, treating as not owned: %s",
                token_id, self._contract_address, e,
            )
            return False
        return addresses_equal(owner, address)

    async def metadata_for_token(self, token_id: str) -> dict[str, Any] | None:
        """Fetch the token's ERC-721 metadata JSON via ``tokenURI``.

        Any failure (no tokenURI, unreachable host, non-JSON body) gives None.
        """
        try:
            token_uri = await self._client.call(self._contract_address, TOKEN_URI, [token_id])
            metadata = await self._fetcher.fetch_json(token_uri)
        except Exception as e:
            logger.warning(
                "Metadata unavailable for token %s on %s: %s",
                token_id, self._contract_address, e,
            )
            return None

        if not isinstance(metadata, dict):
            logger.warning(
                "Metadata for token %s on %s is not a JSON object",
                token_id, self._contract_address,
            )
            return None
        return metadata

    def image_url_from_metadata(
        self, token_id: str, metadata: dict[str, Any] | None
    ) -> str | None:
        if metadata is None:
            return None
        image = metadata.get("image")
        if isinstance(image, str) and image:
            return image
        return None

    async def image_url_for_token(self, token_id: str) -> str | None:
        return self.image_url_from_metadata(
            token_id, await self.metadata_for_token(token_id)
        )
