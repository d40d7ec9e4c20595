"""Collection registry — fixed mapping from collection name to validator."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from .interfaces.chain import ChainClient
from .interfaces.metadata import MetadataFetcher
from .interfaces.validator import TokenValidator
from .validators import CryptopunksValidator, ERC721Validator

logger = logging.getLogger(__name__)


def _erc721(contract_address: str) -> Callable[[ChainClient, MetadataFetcher], TokenValidator]:
    return lambda client, fetcher: ERC721Validator(contract_address, client, fetcher)


# Supported collections keyed by their common nickname.
_COLLECTION_FACTORIES: dict[str, Callable[[ChainClient, MetadataFetcher], Any]] = {
    "bayc": _erc721("0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D"),
    "loot": _erc721("0xff9c1b15b16263c61d017ee9f65c50e4ae0113d7"),
    "mayc": _erc721("0x60e4d786628fea6478f785a6d7e704777c86a7c6"),
    "sadgirlsbar": _erc721("0x335eeef8e93a7a757d9e7912044d9cd264e2b2d8"),
    "cryptopunks": lambda client, fetcher: CryptopunksValidator(client),
}


class ValidatorRegistry:
    """Read-only mapping of collection identifiers to validators."""

    def __init__(self, validators: Mapping[str, TokenValidator]) -> None:
        for name, validator in validators.items():
            if validator is None:
                raise ValueError(f"Collection '{name}' has no validator")
        self._validators = MappingProxyType(dict(validators))

    def get(self, collection: str) -> TokenValidator | None:
        return self._validators.get(collection)

    def collections(self) -> tuple[str, ...]:
        return tuple(sorted(self._validators))

    def __contains__(self, collection: object) -> bool:
        return collection in self._validators

    def __iter__(self) -> Iterator[str]:
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)


def build_registry(
    chain_client: ChainClient, metadata_fetcher: MetadataFetcher
) -> ValidatorRegistry:
    """Construct every supported validator around the shared clients."""
    validators = {
        name: factory(chain_client, metadata_fetcher)
        for name, factory in _COLLECTION_FACTORIES.items()
    }
    logger.info("Registered %d collections: %s", len(validators), ", ".join(validators))
    return ValidatorRegistry(validators)
