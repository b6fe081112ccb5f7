"""Health check endpoint: answers even before storage is ready."""

from fastapi import APIRouter, Request

from noticeboard.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Returns application status and whether the snapshot store is loaded."""
    settings = get_settings()
    store_ready = getattr(request.app.state, "store", None) is not None
    return {
        "status": "healthy" if store_ready else "starting",
        "version": settings.app_version,
        "environment": settings.app_env,
        "storage": "ready" if store_ready else "unavailable",
    }
