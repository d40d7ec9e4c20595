"""Human-readable ABI fragments — parsing, call encoding and result decoding.

Fragments use the same shape as ethers.js human-readable ABIs::

    function balanceOf(address owner) view returns (uint256)
    function ownerOf(uint256 tokenId) external view returns (address)

Only flat parameter lists are supported; tuple types are not needed by any
collection contract in the registry.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import decode_hex, function_signature_to_4byte_selector, to_checksum_address

from ...errors import ContractRevertError, InvalidQueryError

_FRAGMENT_RE = re.compile(
    r"^\s*(?:function\s+)?(?P<name>[A-Za-z_$][\w$]*)\s*"
    r"\((?P<inputs>[^()]*)\)\s*"
    r"(?P<modifiers>(?:[A-Za-z]+\s*)*?)"
    r"(?:returns\s*\((?P<outputs>[^()]*)\))?\s*$"
)

_LOCATION_KEYWORDS = {"memory", "calldata", "storage", "indexed"}


def _canonical_type(raw_type: str) -> str:
    if raw_type == "uint":
        return "uint256"
    if raw_type == "int":
        return "int256"
    return raw_type


def _parse_params(params: str | None) -> tuple[str, ...]:
    if not params or not params.strip():
        return ()
    types: list[str] = []
    for param in params.split(","):
        words = [w for w in param.split() if w not in _LOCATION_KEYWORDS]
        if not words:
            raise ValueError(f"Empty parameter in ABI fragment: {params!r}")
        types.append(_canonical_type(words[0]))
    return tuple(types)


@dataclass(frozen=True)
class ContractFunction:
    """A parsed contract function: name plus input and output types."""

    name: str
    input_types: tuple[str, ...]
    output_types: tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, args: Sequence[Any]) -> str:
        """Return ``0x``-prefixed calldata for ``args``.

        Decimal strings are accepted for integer parameters, so token ids can
        be passed straight through from a URL path.
        """
        if len(args) != len(self.input_types):
            raise InvalidQueryError(
                f"{self.signature} takes {len(self.input_types)} argument(s), "
                f"got {len(args)}"
            )
        values = [_coerce_arg(t, a) for t, a in zip(self.input_types, args)]
        try:
            payload = encode(list(self.input_types), values)
        except (EncodingError, TypeError, ValueError) as e:
            raise InvalidQueryError(f"Cannot encode arguments for {self.signature}: {e}") from e
        return "0x" + (self.selector + payload).hex()

    def decode_result(self, data: str) -> Any:
        """Decode ``eth_call`` return data.

        A single output is returned bare; several outputs come back as a tuple.
        """
        if not self.output_types:
            return None
        try:
            raw = decode_hex(data)
            values = decode(list(self.output_types), raw)
        except (DecodingError, TypeError, ValueError) as e:
            raise ContractRevertError(
                f"Cannot decode result of {self.signature}: {e}"
            ) from e

        values = tuple(
            to_checksum_address(v) if t == "address" else v
            for t, v in zip(self.output_types, values)
        )
        if len(values) == 1:
            return values[0]
        return values


def _coerce_arg(abi_type: str, value: Any) -> Any:
    if (abi_type.startswith("uint") or abi_type.startswith("int")) and isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError:
            raise InvalidQueryError(f"Expected an integer for {abi_type}, got {value!r}") from None
    return value


@lru_cache(maxsize=128)
def parse_function(fragment: str) -> ContractFunction:
    """Parse a human-readable function fragment. Raises ValueError if malformed."""
    match = _FRAGMENT_RE.match(fragment)
    if not match:
        raise ValueError(f"Malformed ABI fragment: {fragment!r}")
    return ContractFunction(
        name=match.group("name"),
        input_types=_parse_params(match.group("inputs")),
        output_types=_parse_params(match.group("outputs")),
    )
