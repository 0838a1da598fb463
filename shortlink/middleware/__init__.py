"""HTTP middleware for the URL shortener."""

from shortlink.middleware.logging import RequestLoggingMiddleware, add_logging_middleware

__all__ = ["RequestLoggingMiddleware", "add_logging_middleware"]
