"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from mfg_console.presentation.api.v1.endpoints.health import router as health_router
from mfg_console.presentation.api.v1.endpoints.masters import router as masters_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(masters_router)
