"""
Request logging middleware for FastAPI using Loguru.

Every request gets an ID, echoed back in the X-Request-ID header, and one
REQUEST-level log line with method, path, status and duration.
"""

import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable to store request ID across async context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def get_client_ip(request: Request) -> str:
    """Client IP, preferring the first X-Forwarded-For entry."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and tag the response with its request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request_id_var.set(request_id)

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers[REQUEST_ID_HEADER] = request_id

        log_record: Dict[str, Any] = {
            "request_id": request_id,
            "client_ip": get_client_ip(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
        }
        logger.log(
            "REQUEST",
            "{method} {path} {status_code} {process_time_ms}ms {client_ip} {request_id}",
            **log_record,
        )
        return response


def add_logging_middleware(app) -> None:
    """Add the request logging middleware to the FastAPI application."""
    app.add_middleware(RequestLoggingMiddleware)
