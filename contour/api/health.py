"""Health check endpoints"""

from fastapi import APIRouter, Depends

from contour.api.contour import get_resolver_registry
from contour.services.commands import command_registry
from contour.services.engine import detector_order
from contour.services.resolvers import ResolverRegistry

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(resolvers: ResolverRegistry = Depends(get_resolver_registry)):
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "contour-engine",
        "commands": len(command_registry.get_command_ids()),
        "detectors": len(detector_order()),
        "resolvers": sorted(channel.value for channel in resolvers.get_channels()),
    }
