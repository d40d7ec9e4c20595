"""HTTP API for ownership queries.

Built on ``aiohttp``; routes::

    GET /                                    supported collections
    GET /health                              liveness
    GET /api/{collection}/{address}          {"owns": bool}
    GET /api/{collection}/{address}/{token}  {"owns": bool, "imageURL": str|null}

Add ``?metadata=true`` to the token route to include the token's metadata.
"""
from __future__ import annotations

import logging

from aiohttp import web

from ..errors import ChainCallError, InvalidQueryError, UnsupportedCollectionError
from ..services.dispatcher import QueryDispatcher

logger = logging.getLogger(__name__)

UNSUPPORTED_COLLECTION_MESSAGE = "Unsupported NFT name."
INVALID_PARAMETERS_MESSAGE = "Invalid parameters"
CHAIN_FAILURE_MESSAGE = "Chain query failed."

_TRUTHY = {"1", "true", "yes", "on"}


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Map domain errors to JSON error responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except UnsupportedCollectionError as e:
        logger.info("Rejected %s: %s", request.path, e)
        return web.json_response({"error": UNSUPPORTED_COLLECTION_MESSAGE}, status=400)
    except InvalidQueryError as e:
        logger.info("Rejected %s: %s", request.path, e)
        return web.json_response({"error": INVALID_PARAMETERS_MESSAGE}, status=400)
    except ChainCallError:
        logger.exception("Chain query failed for %s", request.path)
        return web.json_response({"error": CHAIN_FAILURE_MESSAGE}, status=500)
    except Exception:
        logger.exception("Unhandled error for %s", request.path)
        return web.json_response({"error": "Internal server error."}, status=500)


class APIServer:
    """Thin aiohttp wrapper around a QueryDispatcher."""

    def __init__(
        self,
        dispatcher: QueryDispatcher,
        host: str = "0.0.0.0",
        port: int = 8080,
    ) -> None:
        self.dispatcher = dispatcher
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    # ── lifecycle ────────────────────────────────────────────────

    def build_app(self) -> web.Application:
        app = web.Application(middlewares=[error_middleware])
        self._register_routes(app)
        return app

    async def start(self) -> None:
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("API listening on http://%s:%s", self.host, self.port)

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None

    # ── routes ───────────────────────────────────────────────────

    def _register_routes(self, app: web.Application) -> None:
        app.router.add_get("/", self._index)
        app.router.add_get("/health", self._health)
        app.router.add_get("/api/{collection}/{address}", self._owns_any)
        app.router.add_get("/api/{collection}/{address}/{token}", self._owns_token)

    # ── handlers ─────────────────────────────────────────────────

    async def _index(self, _request: web.Request) -> web.Response:
        return web.json_response({"collections": list(self.dispatcher.collections())})

    async def _health(self, _request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def _owns_any(self, request: web.Request) -> web.Response:
        """Does the address own any token of this collection?"""
        collection = request.match_info["collection"]
        address = request.match_info["address"]
        result = await self.dispatcher.owns_any(collection, address)
        return web.json_response(result.to_dict())

    async def _owns_token(self, request: web.Request) -> web.Response:
        """Does the address own this specific token?"""
        collection = request.match_info["collection"]
        address = request.match_info["address"]
        token = request.match_info["token"]
        include_metadata = request.query.get("metadata", "").lower() in _TRUTHY
        result = await self.dispatcher.owns_token(
            collection, address, token, include_metadata=include_metadata
        )
        return web.json_response(result.to_dict())
