"""Query dispatch — routes ownership questions to the right validator."""
from __future__ import annotations

import logging

from ..chains.ethereum import EthereumClient
from ..config import AppConfig
from ..errors import UnsupportedCollectionError
from ..interfaces.validator import TokenValidator
from ..metadata import HttpMetadataFetcher
from ..models import OwnershipResult, TokenOwnershipResult
from ..registry import ValidatorRegistry, build_registry

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """Resolve a collection name and assemble validator answers into results."""

    def __init__(self, registry: ValidatorRegistry) -> None:
        self._registry = registry

    def collections(self) -> tuple[str, ...]:
        return self._registry.collections()

    def _validator(self, collection: str) -> TokenValidator:
        validator = self._registry.get(collection)
        if validator is None:
            raise UnsupportedCollectionError(collection)
        return validator

    async def owns_any(self, collection: str, address: str) -> OwnershipResult:
        """Does ``address`` hold any token of ``collection``?

        Raises UnsupportedCollectionError for unknown collections. Chain
        failures propagate as ChainCallError.
        """
        validator = self._validator(collection)
        owns = await validator.owns_any(address)
        logger.info("%s owns any %s: %s", address, collection, owns)
        return OwnershipResult(owns=owns)

    async def owns_token(
        self,
        collection: str,
        address: str,
        token_id: str,
        include_metadata: bool = False,
    ) -> TokenOwnershipResult:
        """Does ``address`` hold ``token_id``? Includes the token's image URL."""
        validator = self._validator(collection)
        owns = await validator.owns_token(address, token_id)
        metadata = None
        if include_metadata:
            # one fetch, so imageURL always matches the returned metadata
            metadata = await validator.metadata_for_token(token_id)
            image_url = validator.image_url_from_metadata(token_id, metadata)
        else:
            image_url = await validator.image_url_for_token(token_id)
        logger.info("%s owns %s #%s: %s", address, collection, token_id, owns)
        return TokenOwnershipResult(
            owns=owns,
            image_url=image_url,
            metadata=metadata,
            include_metadata=include_metadata,
        )


def build_dispatcher(config: AppConfig) -> QueryDispatcher:
    """Wire the chain client, metadata fetcher and registry from configuration."""
    chain_client = EthereumClient(config.chain)
    fetcher = HttpMetadataFetcher(config.metadata)
    return QueryDispatcher(build_registry(chain_client, fetcher))
