"""Unit tests for the collection registry."""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from nft_oracle.registry import ValidatorRegistry, build_registry
from nft_oracle.validators import CryptopunksValidator, ERC721Validator


@pytest.fixture()
def registry() -> ValidatorRegistry:
    return build_registry(AsyncMock(), AsyncMock())


class TestBuildRegistry:
    def test_supported_collections(self, registry: ValidatorRegistry) -> None:
        assert registry.collections() == (
            "bayc",
            "cryptopunks",
            "loot",
            "mayc",
            "sadgirlsbar",
        )
        assert len(registry) == 5

    def test_standard_collections_use_erc721(self, registry: ValidatorRegistry) -> None:
        for name in ("bayc", "loot", "mayc", "sadgirlsbar"):
            assert isinstance(registry.get(name), ERC721Validator)

    def test_cryptopunks_uses_legacy_validator(self, registry: ValidatorRegistry) -> None:
        assert isinstance(registry.get("cryptopunks"), CryptopunksValidator)

    def test_contract_addresses(self, registry: ValidatorRegistry) -> None:
        assert (
            registry.get("bayc").contract_address
            == "0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D"
        )
        addresses = {registry.get(name).contract_address.lower() for name in registry}
        assert len(addresses) == 5

    def test_shared_chain_client(self) -> None:
        client = AsyncMock()
        registry = build_registry(client, AsyncMock())
        assert all(registry.get(name)._client is client for name in registry)


class TestValidatorRegistry:
    def test_lookup_is_case_sensitive(self, registry: ValidatorRegistry) -> None:
        assert "bayc" in registry
        assert "BAYC" not in registry
        assert registry.get("BAYC") is None

    def test_unknown_collection(self, registry: ValidatorRegistry) -> None:
        assert registry.get("doodles") is None

    def test_none_validator_rejected(self) -> None:
        with pytest.raises(ValueError, match="no validator"):
            ValidatorRegistry({"bayc": None})  # type: ignore[dict-item]

    def test_source_mapping_changes_do_not_leak(self) -> None:
        validators = {"cryptopunks": CryptopunksValidator(AsyncMock())}
        registry = ValidatorRegistry(validators)
        validators["extra"] = CryptopunksValidator(AsyncMock())
        assert "extra" not in registry
