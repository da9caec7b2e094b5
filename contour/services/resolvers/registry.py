"""Resolver Registry - one resolver per network-backed channel."""
import logging
from typing import Dict, List

from contour.models.module import ModuleId
from .base import BaseResolver

logger = logging.getLogger(__name__)


class ResolverRegistry:
    """Manages registration and retrieval of resolvers."""

    def __init__(self):
        self._resolvers: Dict[ModuleId, BaseResolver] = {}

    def register(self, resolver: BaseResolver):
        """Register a resolver, replacing any previous one for its channel."""
        self._resolvers[resolver.module_id] = resolver
        logger.info(f"Resolver registered: {resolver.module_id.value}")

    def get_resolver(self, module_id: ModuleId) -> BaseResolver | None:
        return self._resolvers.get(module_id)

    def has_resolver(self, module_id: ModuleId) -> bool:
        return module_id in self._resolvers

    def get_channels(self) -> List[ModuleId]:
        return list(self._resolvers.keys())
