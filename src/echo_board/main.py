# src/echo_board/main.py
"""Main entry point for the Echo Board application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from echo_board.api.v1 import (
    admin_router,
    posts_router,
    trending_router,
    uploads_router,
    votes_router,
)
from echo_board.core.errors import (
    EchoError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from echo_board.core.settings import settings
from echo_board.services.media import UPLOADS_ROUTE

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[EchoError], int] = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
}

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Anonymous micro-posting API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(trending_router, prefix="/api/v1")
app.include_router(uploads_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")

# Uploaded media; the directory is created on first upload.
app.mount(
    UPLOADS_ROUTE,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)


@app.exception_handler(EchoError)
async def handle_domain_error(request: Request, exc: EchoError) -> JSONResponse:
    """Translate domain errors into HTTP responses.

    Anything without a client-facing status is an internal failure: it is
    logged with its traceback and reported without storage details.
    """
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Snapshot store: %s", settings.data_file.resolve())
    logger.info("Uploads: %s", settings.upload_dir.resolve())
    if settings.uses_default_admin_password:
        logger.warning("ADMIN_PASSWORD is not set; the default password is in use")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Anonymous micro-posting API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("echo_board.main:app", host="0.0.0.0", port=3001, reload=settings.debug)
