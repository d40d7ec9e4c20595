"""Command-line interface for the NFT ownership oracle."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .api import APIServer
from .config import load_config
from .errors import ChainCallError, InvalidQueryError, UnsupportedCollectionError
from .logging_setup import configure_logging
from .services import QueryDispatcher, build_dispatcher

logger = logging.getLogger(__name__)

EXIT_CHAIN_FAILURE = 1
EXIT_BAD_QUERY = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="nft-oracle",
        description="Check NFT ownership against the Ethereum chain",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    serve_parser = sub.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address (overrides config)")
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Listen port (overrides config)"
    )

    owns_parser = sub.add_parser("owns", help="Single ownership query")
    owns_parser.add_argument("collection", help="Collection name, e.g. bayc")
    owns_parser.add_argument("address", help="Wallet address")
    owns_parser.add_argument("token", nargs="?", default=None, help="Token id")
    owns_parser.add_argument(
        "--metadata",
        action="store_true",
        help="Include token metadata (only with a token id)",
    )

    sub.add_parser("collections", help="List supported collections")

    return parser


async def _serve(dispatcher: QueryDispatcher, host: str, port: int) -> None:
    server = APIServer(dispatcher, host=host, port=port)
    await server.start()
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()


async def _owns(dispatcher: QueryDispatcher, args: argparse.Namespace) -> int:
    try:
        if args.token is None:
            result = await dispatcher.owns_any(args.collection, args.address)
        else:
            result = await dispatcher.owns_token(
                args.collection, args.address, args.token, include_metadata=args.metadata
            )
    except (UnsupportedCollectionError, InvalidQueryError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_BAD_QUERY
    except ChainCallError as e:
        logger.error("Chain query failed: %s", e)
        return EXIT_CHAIN_FAILURE

    print(json.dumps(result.to_dict(), indent=2))
    return 0


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    dispatcher = build_dispatcher(config)

    if args.command == "serve":
        host = args.host or config.server.host
        port = args.port or config.server.port
        await _serve(dispatcher, host, port)
        return 0
    if args.command == "owns":
        return await _owns(dispatcher, args)
    if args.command == "collections":
        for name in dispatcher.collections():
            print(name)
        return 0

    build_parser().print_help()
    return 1


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(asyncio.run(_run(args)))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
