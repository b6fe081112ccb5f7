"""Top-level API router: aggregates all endpoint routers under /api."""

from fastapi import APIRouter

from noticeboard.presentation.api.endpoints.health import router as health_router
from noticeboard.presentation.api.endpoints.messages import router as messages_router
from noticeboard.presentation.api.endpoints.clients import router as clients_router
from noticeboard.presentation.api.endpoints.stats import router as stats_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(messages_router)
router.include_router(clients_router)
router.include_router(stats_router)
