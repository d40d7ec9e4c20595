"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from nft_oracle.chains.ethereum.abi import parse_function
from nft_oracle.config import AppConfig, ChainConfig, MetadataConfig, ServerConfig
from nft_oracle.errors import ContractRevertError


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_metadata_config() -> MetadataConfig:
    return MetadataConfig(ipfs_gateway="https://gateway.example.com/ipfs", timeout=5)


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig, sample_metadata_config: MetadataConfig
) -> AppConfig:
    return AppConfig(
        chain=sample_chain_config,
        metadata=sample_metadata_config,
        server=ServerConfig(host="127.0.0.1", port=9090),
    )


SAMPLE_YAML = textwrap.dedent("""\
    chain:
      rpc_endpoints: ["https://rpc.example.com", "https://backup.example.com"]
      rpc_timeout: 10
    metadata:
      ipfs_gateway: "https://gateway.example.com/ipfs/"
      timeout: 5
    server:
      host: "127.0.0.1"
      port: 9090
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample token data
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_metadata() -> dict[str, Any]:
    return {
        "name": "Bored Ape #1",
        "description": "A bored ape.",
        "image": "ipfs://QmImageCid/1.png",
        "attributes": [{"trait_type": "Fur", "value": "Golden Brown"}],
    }


# ---------------------------------------------------------------------------
# Fake chain
# ---------------------------------------------------------------------------


def fake_chain(
    balances: dict[str, int] | None = None,
    owners: dict[str, str] | None = None,
    token_uris: dict[str, str] | None = None,
) -> AsyncMock:
    """Chain client mock answering from in-memory state.

    Unknown token ids revert, like ``ownerOf`` on an unminted token.
    """
    balances = balances or {}
    owners = owners or {}
    token_uris = token_uris or {}

    async def call(contract_address: str, function_signature: str, args=()):
        name = parse_function(function_signature).name
        if name == "balanceOf":
            return balances.get(args[0], 0)
        if name in ("ownerOf", "punkIndexToAddress"):
            token = str(args[0])
            if token not in owners:
                raise ContractRevertError("RPC Error: execution reverted")
            return owners[token]
        if name == "tokenURI":
            token = str(args[0])
            if token not in token_uris:
                raise ContractRevertError("RPC Error: execution reverted")
            return token_uris[token]
        raise AssertionError(f"unexpected call {function_signature}")

    client = AsyncMock()
    client.call = AsyncMock(side_effect=call)
    return client


@pytest.fixture()
def make_chain() -> Callable[..., AsyncMock]:
    return fake_chain


@pytest.fixture()
def mock_fetcher() -> AsyncMock:
    return AsyncMock()
