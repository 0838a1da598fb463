"""API package for the URL shortener.

This package contains the API layer components including routes,
request/response schemas, and dependency providers.
"""

from shortlink.api.routes import api_router

__all__ = ["api_router"]
