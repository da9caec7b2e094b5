"""Resolvers - async completion of network-backed detections."""
from .base import BaseResolver
from .registry import ResolverRegistry
from .currency import CurrencyResolver
from .translator import TranslatorResolver
from .dictionary import DictionaryResolver


def build_default_resolvers() -> ResolverRegistry:
    """Registry wired to the live lookup services."""
    registry = ResolverRegistry()
    registry.register(CurrencyResolver())
    registry.register(TranslatorResolver())
    registry.register(DictionaryResolver())
    return registry


__all__ = [
    "BaseResolver",
    "ResolverRegistry",
    "CurrencyResolver",
    "TranslatorResolver",
    "DictionaryResolver",
    "build_default_resolvers",
]
