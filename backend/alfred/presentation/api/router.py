"""Top-level API router — mounts every feature router under /api."""

from fastapi import APIRouter

from alfred.presentation.api.endpoints.health import router as health_router
from alfred.presentation.api.projects_controller import router as projects_router
from alfred.presentation.api.communications_controller import router as communications_router
from alfred.presentation.api.actions_controller import router as actions_router
from alfred.presentation.api.weather_controller import router as weather_router
from alfred.presentation.api.realtime_controller import router as realtime_router
from alfred.presentation.api.realtime_controller import ws_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(projects_router)
router.include_router(communications_router)
router.include_router(actions_router)
router.include_router(weather_router)
router.include_router(realtime_router)

__all__ = ["router", "ws_router"]
