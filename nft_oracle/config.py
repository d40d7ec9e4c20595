"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_RPC_URL = "https://cloudflare-eth.com/"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = (DEFAULT_RPC_URL,)
    rpc_timeout: int = 30


@dataclass(frozen=True)
class MetadataConfig:
    ipfs_gateway: str = "https://ipfs.io/ipfs"
    timeout: int = 15


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    endpoints = raw.get("rpc_endpoints", [DEFAULT_RPC_URL])
    if isinstance(endpoints, str):
        endpoints = [endpoints]
    return ChainConfig(
        rpc_endpoints=tuple(e for e in endpoints if e),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_metadata(raw: dict[str, Any]) -> MetadataConfig:
    return MetadataConfig(
        ipfs_gateway=str(raw.get("ipfs_gateway", MetadataConfig.ipfs_gateway)).rstrip("/"),
        timeout=int(raw.get("timeout", 15)),
    )


def _build_server(raw: dict[str, Any]) -> ServerConfig:
    return ServerConfig(
        host=str(raw.get("host", "0.0.0.0")),
        port=int(raw.get("port", 8080)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package). When no path is
            given and that file does not exist, built-in defaults are used.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
        if not config_path.exists():
            logger.info("No config.yaml found, using built-in defaults")
            cfg = AppConfig()
            _validate(cfg)
            return cfg
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain") or {}),
        metadata=_build_metadata(raw.get("metadata") or {}),
        server=_build_server(raw.get("server") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _is_http_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")

    for endpoint in cfg.chain.rpc_endpoints:
        if not _is_http_url(endpoint):
            raise ValueError(f"RPC endpoint '{endpoint}' is not an http(s) URL")

    if cfg.chain.rpc_timeout <= 0:
        raise ValueError("rpc_timeout must be positive")

    if not _is_http_url(cfg.metadata.ipfs_gateway):
        raise ValueError(
            f"IPFS gateway '{cfg.metadata.ipfs_gateway}' is not an http(s) URL"
        )
    if cfg.metadata.timeout <= 0:
        raise ValueError("metadata timeout must be positive")

    if not 1 <= cfg.server.port <= 65535:
        raise ValueError(f"Server port {cfg.server.port} is out of range")
