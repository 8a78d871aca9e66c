"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shortl.api.routes import frontend, links, redirect, health
from shortl.core.config import settings

# Create root router
api_router = APIRouter()

# Root redirect and the single page application
api_router.include_router(frontend.router)

# Shorten and stats endpoints with API prefix
api_router.include_router(
    links.router,
    prefix=settings.API_PREFIX
)

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=settings.API_PREFIX
)

# Redirect routes go last: /{token} matches any single path segment
api_router.include_router(
    redirect.router
)

__all__ = ["api_router"]
