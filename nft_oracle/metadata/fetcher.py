"""Off-chain token metadata fetcher (http, ipfs and data: URIs)."""
from __future__ import annotations

import base64
import binascii
import json
import logging
import ssl
from typing import Any
from urllib.parse import unquote

import aiohttp
import certifi

from ..config import MetadataConfig
from ..errors import MetadataError

logger = logging.getLogger(__name__)


class HttpMetadataFetcher:
    """Resolve token URIs to decoded JSON documents."""

    def __init__(self, config: MetadataConfig) -> None:
        self.ipfs_gateway = config.ipfs_gateway.rstrip("/")
        self.timeout = config.timeout

    def resolve_url(self, uri: str) -> str:
        """Map an ``ipfs://`` URI onto the configured HTTP gateway."""
        if uri.startswith("ipfs://"):
            path = uri[len("ipfs://"):]
            if path.startswith("ipfs/"):
                path = path[len("ipfs/"):]
            return f"{self.ipfs_gateway}/{path}"
        return uri

    async def fetch_json(self, uri: str) -> Any:
        """Return the JSON document behind ``uri``. Raises MetadataError on failure."""
        uri = uri.strip()
        if uri.startswith("data:"):
            return _decode_data_uri(uri)

        url = self.resolve_url(uri)
        if not (url.startswith("https://") or url.startswith("http://")):
            raise MetadataError(f"Unsupported token URI scheme: {uri!r}")

        logger.debug("Fetching token metadata from %s", url)
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        raise MetadataError(
                            f"Error fetching metadata from {url}: HTTP {response.status}"
                        )
                    # Many metadata hosts serve JSON as text/plain
                    return await response.json(content_type=None)
        except MetadataError:
            raise
        except Exception as e:
            raise MetadataError(f"Error fetching metadata from {url}: {e}") from e


def _decode_data_uri(uri: str) -> Any:
    """Decode ``data:application/json[;base64],...`` into JSON."""
    header, sep, payload = uri.partition(",")
    if not sep:
        raise MetadataError("Malformed data URI: missing ','")

    params = header[len("data:"):].split(";")
    media_type = params[0].strip().lower() or "text/plain"
    if media_type not in ("application/json", "text/plain"):
        raise MetadataError(f"Unsupported data URI media type: {media_type}")

    try:
        if "base64" in params[1:]:
            text = base64.b64decode(payload, validate=True).decode("utf-8")
        else:
            text = unquote(payload)
        return json.loads(text)
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise MetadataError(f"Malformed data URI payload: {e}") from e
