"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the mapping store and service instances.
"""

from fastapi import Depends, Request

from shortlink.core.config import settings
from shortlink.repositories.url_repository import URLRepository
from shortlink.services.shortener import ShortenerService


def get_url_repository(request: Request) -> URLRepository:
    """Get the mapping store opened at startup."""
    return request.app.state.store


def get_base_url() -> str:
    """Get the base URL for shortened links."""
    return settings.BASE_URL


def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
    base_url: str = Depends(get_base_url),
) -> ShortenerService:
    """Get an instance of the URL shortening service."""
    return ShortenerService(repository=url_repo, base_url=base_url)
