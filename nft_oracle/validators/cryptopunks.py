"""Validator for CryptoPunks, which predate the ERC-721 standard."""
from __future__ import annotations

import logging
from typing import Any

from ..interfaces.chain import ChainClient
from .common import addresses_equal, balance_of

logger = logging.getLogger(__name__)

CRYPTOPUNKS_ADDRESS = "0xb47e3cd837ddf8e4c57f05d70ab865de6e193bbb"

PUNK_INDEX_TO_ADDRESS = "function punkIndexToAddress(uint256) view returns (address)"

IMAGE_URL_TEMPLATE = "https://www.larvalabs.com/public/images/cryptopunks/punk{token_id}.png"


class CryptopunksValidator:
    """Ownership checks against the original CryptoPunks market contract.

    The contract has no ``ownerOf`` and no ``tokenURI``; ownership is read from
    ``punkIndexToAddress`` and images live on Larva Labs' site.
    """

    def __init__(self, chain_client: ChainClient) -> None:
        self._client = chain_client

    @property
    def contract_address(self) -> str:
        return CRYPTOPUNKS_ADDRESS

    async def owns_any(self, address: str) -> bool:
        return await balance_of(self._client, CRYPTOPUNKS_ADDRESS, address) > 0

    async def owns_token(self, address: str, token_id: str) -> bool:
        try:
            owner = await self._client.call(
                CRYPTOPUNKS_ADDRESS, PUNK_INDEX_TO_ADDRESS, [token_id]
            )
        except Exception as e:
            logger.debug(
                "punkIndexToAddress(%s) failed, treating as not owned: %s", token_id, e
            )
            return False
        return addresses_equal(owner, address)

    async def metadata_for_token(self, token_id: str) -> dict[str, Any] | None:
        return None

    def image_url_from_metadata(
        self, token_id: str, metadata: dict[str, Any] | None
    ) -> str | None:
        return IMAGE_URL_TEMPLATE.format(token_id=token_id)

    async def image_url_for_token(self, token_id: str) -> str | None:
        return self.image_url_from_metadata(token_id, None)
