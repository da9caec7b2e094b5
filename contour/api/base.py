from fastapi import APIRouter
from contour.api import contour, health

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(contour.router)
api_router.include_router(health.router)
