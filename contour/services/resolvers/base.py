"""Base classes for the resolver layer."""
import logging
from abc import ABC, abstractmethod

from contour.models.module import ModuleId, ResolvableResult
from contour.services.lookup.errors import ResolverError

logger = logging.getLogger(__name__)


class BaseResolver(ABC):
    """
    Completes a loading result with data from an external service.
    One resolver = one channel (module id).
    """

    @property
    @abstractmethod
    def module_id(self) -> ModuleId:
        """Channel this resolver serves"""

    @abstractmethod
    async def _resolve(self, partial: ResolvableResult) -> ResolvableResult:
        """Look up and return the completed result. May raise ResolverError."""

    async def resolve(self, partial: ResolvableResult) -> ResolvableResult:
        """Never raises: failures come back in the result's `error` field."""
        try:
            return await self._resolve(partial)
        except ResolverError as e:
            logger.warning(f"{self.module_id.value} lookup failed: {e.message}")
            return self.failed(partial, e.message)
        except Exception as e:
            logger.error(f"{self.module_id.value} resolver error: {e}")
            return self.failed(partial, "Lookup failed")

    @staticmethod
    def failed(partial: ResolvableResult, message: str) -> ResolvableResult:
        return partial.model_copy(update={"is_loading": False, "error": message, "display": message})
