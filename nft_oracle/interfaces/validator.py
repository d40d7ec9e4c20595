"""Token validator protocol — per-collection ownership and metadata queries."""
from typing import Any, Protocol


class TokenValidator(Protocol):
    """Abstract interface for answering ownership questions about one collection."""

    contract_address: str

    async def owns_any(self, address: str) -> bool:
        """True if ``address`` holds at least one token. Chain errors propagate."""
        ...

    async def owns_token(self, address: str, token_id: str) -> bool:
        """True if ``address`` holds ``token_id``. Lookup failures give False."""
        ...

    async def metadata_for_token(self, token_id: str) -> dict[str, Any] | None:
        """ERC-721 display metadata, or None when unavailable."""
        ...

    async def image_url_for_token(self, token_id: str) -> str | None:
        """Displayable image URL, or None when unavailable."""
        ...

    def image_url_from_metadata(
        self, token_id: str, metadata: dict[str, Any] | None
    ) -> str | None:
        """Image URL derived from already-fetched metadata, without remote calls."""
        ...
