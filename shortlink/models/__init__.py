"""
Data models for the URL shortener.

This module imports and exports all SQLModel models used in the application.
"""

from shortlink.models.url import URLMapping, URLMappingBase

__all__ = [
    "URLMapping",
    "URLMappingBase",
]
