"""Per-collection token validators."""
from .cryptopunks import CryptopunksValidator
from .erc721 import ERC721Validator

__all__ = ["CryptopunksValidator", "ERC721Validator"]
