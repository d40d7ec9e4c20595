"""Unit tests for CLI argument parsing and the one-shot query command."""
from __future__ import annotations

import argparse
import json
from unittest.mock import AsyncMock

import pytest

from nft_oracle.cli import EXIT_BAD_QUERY, EXIT_CHAIN_FAILURE, _owns, build_parser
from nft_oracle.errors import RpcTransportError, UnsupportedCollectionError
from nft_oracle.models import OwnershipResult, TokenOwnershipResult


class TestBuildParser:
    def test_serve_command(self) -> None:
        args = build_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.host is None
        assert args.port is None

    def test_serve_overrides(self) -> None:
        args = build_parser().parse_args(["serve", "--host", "127.0.0.1", "--port", "9000"])
        assert args.host == "127.0.0.1"
        assert args.port == 9000

    def test_owns_any(self) -> None:
        args = build_parser().parse_args(["owns", "bayc", "0xabc"])
        assert args.command == "owns"
        assert args.collection == "bayc"
        assert args.address == "0xabc"
        assert args.token is None
        assert args.metadata is False

    def test_owns_token_with_metadata(self) -> None:
        args = build_parser().parse_args(["owns", "bayc", "0xabc", "42", "--metadata"])
        assert args.token == "42"
        assert args.metadata is True

    def test_collections_command(self) -> None:
        assert build_parser().parse_args(["collections"]).command == "collections"

    def test_config_flag(self) -> None:
        args = build_parser().parse_args(["--config", "/tmp/c.yaml", "collections"])
        assert args.config == "/tmp/c.yaml"

    def test_log_level_flag(self) -> None:
        args = build_parser().parse_args(["--log-level", "DEBUG", "collections"])
        assert args.log_level == "DEBUG"

    def test_no_command(self) -> None:
        assert build_parser().parse_args([]).command is None


def _args(*argv: str) -> argparse.Namespace:
    return build_parser().parse_args(["owns", *argv])


class TestOwnsCommand:
    @pytest.mark.asyncio
    async def test_prints_owns_any(self, capsys: pytest.CaptureFixture[str]) -> None:
        dispatcher = AsyncMock()
        dispatcher.owns_any.return_value = OwnershipResult(owns=True)

        code = await _owns(dispatcher, _args("bayc", "0xabc"))

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"owns": True}
        dispatcher.owns_any.assert_awaited_once_with("bayc", "0xabc")

    @pytest.mark.asyncio
    async def test_prints_owns_token(self, capsys: pytest.CaptureFixture[str]) -> None:
        dispatcher = AsyncMock()
        dispatcher.owns_token.return_value = TokenOwnershipResult(
            owns=False, image_url="https://img.example/1.png"
        )

        code = await _owns(dispatcher, _args("bayc", "0xabc", "1"))

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {
            "owns": False,
            "imageURL": "https://img.example/1.png",
        }
        dispatcher.owns_token.assert_awaited_once_with(
            "bayc", "0xabc", "1", include_metadata=False
        )

    @pytest.mark.asyncio
    async def test_unsupported_collection(self, capsys: pytest.CaptureFixture[str]) -> None:
        dispatcher = AsyncMock()
        dispatcher.owns_any.side_effect = UnsupportedCollectionError("doodles")

        code = await _owns(dispatcher, _args("doodles", "0xabc"))

        assert code == EXIT_BAD_QUERY
        assert "doodles" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_chain_failure(self) -> None:
        dispatcher = AsyncMock()
        dispatcher.owns_any.side_effect = RpcTransportError("down")

        assert await _owns(dispatcher, _args("bayc", "0xabc")) == EXIT_CHAIN_FAILURE
