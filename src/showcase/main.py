# src/showcase/main.py
"""Main entry point for the Showcase application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from showcase.api.v1 import leaderboard_router, projects_router, reviews_router
from showcase.core.settings import settings
from showcase.services.duplicate_guard import close_client_store, get_client_store

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.app_name} API",
    description="Anonymous reviews and leaderboards for published projects",
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
app.include_router(projects_router, prefix="/api/v1")
app.include_router(reviews_router, prefix="/api/v1")
app.include_router(leaderboard_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    store = get_client_store()
    logger.info(
        "%s API %s starting (client store: %s)",
        settings.app_name,
        settings.app_version,
        type(store).__name__,
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    close_client_store()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": "Anonymous reviews and leaderboards for published projects",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("showcase.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
