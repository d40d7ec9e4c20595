"""Ethereum chain support."""
from .abi import ContractFunction, parse_function
from .client import EthereumClient

__all__ = ["ContractFunction", "EthereumClient", "parse_function"]
