"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from noticeboard.config import get_settings
from noticeboard.domain.exceptions import StorageError
from noticeboard.infrastructure.logging.log_config import setup_logging
from noticeboard.infrastructure.storage.json_file_store import JsonFileMessageStore
from noticeboard.presentation.api.router import router as api_router
from noticeboard.presentation.web.spa_static_files import SinglePageAppStaticFiles

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: load the snapshot store once for the process."""
    settings = get_settings()
    setup_logging()

    # Failing to create the data directory aborts startup.
    app.state.store = await JsonFileMessageStore.open(
        settings.data_dir, filename=settings.data_file
    )
    logger.info("Notice board storage ready in %s", Path(settings.data_dir).resolve())

    yield

    app.state.store = None


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage failure"},
    )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorageError, _storage_error_handler)

    # Mount API routes
    app.include_router(api_router)

    # Web UI last, so /api wins over static paths
    if Path(settings.web_dir).is_dir():
        app.mount("/", SinglePageAppStaticFiles(directory=settings.web_dir), name="web")
    else:
        logger.debug("Web directory %s not found; serving API only", settings.web_dir)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "noticeboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "development",
    )
