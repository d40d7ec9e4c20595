"""Service modules"""
from .dispatcher import QueryDispatcher, build_dispatcher

__all__ = ["QueryDispatcher", "build_dispatcher"]
