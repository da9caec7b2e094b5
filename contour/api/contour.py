from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from typing import List, Optional
import logging

from contour.models.command import CommandGroup
from contour.models.module import ModuleId, ResolvableResult
from contour.models.state import ModuleData
from contour.services.commands import command_registry, register_all_commands
from contour.services.engine import auto_detect, focused_detect, detector_order
from contour.services.resolvers import ResolverRegistry, build_default_resolvers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contour", tags=["contour"])

_resolver_registry: Optional[ResolverRegistry] = None


def get_resolver_registry() -> ResolverRegistry:
    global _resolver_registry
    if _resolver_registry is None:
        _resolver_registry = build_default_resolvers()
    return _resolver_registry


class DetectRequest(BaseModel):
    text: str
    module_id: Optional[str] = None


class DetectResponse(BaseModel):
    matched: bool
    module: Optional[ModuleData] = None


def _parse_module_id(module_id: Optional[str]) -> Optional[ModuleId]:
    if module_id is None:
        return None
    try:
        return ModuleId(module_id)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown module: {module_id}")


def _detect(request: DetectRequest) -> Optional[ModuleData]:
    module_id = _parse_module_id(request.module_id)
    if module_id is not None:
        return focused_detect(module_id, request.text)
    return auto_detect(request.text)


@router.post("/detect", response_model=DetectResponse)
async def detect(request: DetectRequest):
    """
    Classify text without resolving network-backed results.

    With `module_id` only that module's detector runs (focused mode).
    """
    module = _detect(request)
    return DetectResponse(matched=module is not None and module.result is not None, module=module)


@router.post("/resolve", response_model=DetectResponse)
async def resolve(request: DetectRequest, resolvers: ResolverRegistry = Depends(get_resolver_registry)):
    """Classify text and await the lookup for currency, translation and dictionary results."""
    module = _detect(request)
    if module is None:
        return DetectResponse(matched=False)

    result = module.result
    resolver = resolvers.get_resolver(module.id)
    if isinstance(result, ResolvableResult) and result.needs_resolution and resolver is not None:
        logger.info(f"Resolving {module.id.value} for API request")
        resolved = await resolver.resolve(result)
        module = module.model_copy(update={module.id.value: resolved})
    return DetectResponse(matched=module.result is not None, module=module)


@router.get("/commands", response_model=List[CommandGroup])
async def search_commands(q: str = Query("", description="Substring to match")):
    """Palette search, grouped by category"""
    if not command_registry.has_commands():
        register_all_commands(command_registry)
    return command_registry.search_grouped(q)


@router.get("/commands/{command_id}")
async def get_command(command_id: str):
    if not command_registry.has_commands():
        register_all_commands(command_registry)
    command = command_registry.get_command(command_id)
    if command is None:
        raise HTTPException(status_code=404, detail=f"Command not found: {command_id}")
    return command


@router.get("/detectors")
async def list_detectors():
    """Auto-detect priority order, first match wins"""
    return {"order": [module_id.value for module_id in detector_order()]}
