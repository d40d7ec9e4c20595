"""HTTP surface."""
from .server import APIServer

__all__ = ["APIServer"]
