"""Repositories for the URL shortener.

This package contains repository classes that abstract database operations
for the different models in the application.
"""

from shortlink.repositories.url_repository import URLRepository

__all__ = ["URLRepository"]
