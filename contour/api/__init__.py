# API module exports
from contour.api import contour, health
from contour.api.base import api_router

__all__ = ["contour", "health", "api_router"]
