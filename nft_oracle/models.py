"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OwnershipResult:
    """Answer to "does this address own any token of the collection?"."""

    owns: bool

    def to_dict(self) -> dict[str, Any]:
        return {"owns": self.owns}


@dataclass(frozen=True)
class TokenOwnershipResult:
    """Answer to "does this address own this specific token?".

    ``metadata`` is only part of the response body when it was requested,
    so callers can tell "not requested" from "requested but unavailable".
    """

    owns: bool
    image_url: str | None = None
    metadata: dict[str, Any] | None = None
    include_metadata: bool = False

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"owns": self.owns, "imageURL": self.image_url}
        if self.include_metadata:
            body["metadata"] = self.metadata
        return body
