"""
restlist - REST-backed choice parameter values

FastAPI application entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from restlist import __version__
from restlist.app.api import parameters_router
from restlist.app.dependencies import get_service, reset_services
from restlist.config import get_settings
from restlist.errors import PermissionDeniedError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info("Starting restlist service...")
    get_service()

    yield

    logger.info("Shutting down restlist service...")
    reset_services()


app = FastAPI(
    title="restlist",
    description="Resolve choice parameter values from REST endpoints",
    version=__version__,
    lifespan=lifespan,
    debug=settings.debug,
)

app.include_router(parameters_router, prefix="/api/v1")


@app.exception_handler(PermissionDeniedError)
async def permission_denied_handler(request: Request, exc: PermissionDeniedError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"detail": str(exc)})


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint with service info."""
    return {
        "service": settings.service_name,
        "version": __version__,
        "status": "running",
    }


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "request_timeout": settings.request_timeout,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "restlist.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
