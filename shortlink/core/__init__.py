"""Core module for the URL shortener."""

from shortlink.core.config import settings

__all__ = ["settings"]
