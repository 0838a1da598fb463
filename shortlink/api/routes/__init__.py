"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shortlink.api.routes import health, redirect, shortener
from shortlink.core.config import settings

# Create root router
api_router = APIRouter()

# Shorten lives at /s, beside the short URLs themselves
api_router.include_router(shortener.router)

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=settings.API_PREFIX
)

# Redirect catches every single-segment path, so it goes last
api_router.include_router(redirect.router)

__all__ = ["api_router"]
