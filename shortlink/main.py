"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware, exception handlers and the mapping store
lifecycle.
"""

import time

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shortlink.api import api_router
from shortlink.core.config import settings
from shortlink.core.exceptions import StorageError
from shortlink.core.logging import setup_logging
from shortlink.db.base import get_engine
from shortlink.middleware.logging import add_logging_middleware
from shortlink.repositories.url_repository import URLRepository

# Setup logging
logger = setup_logging()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.REQUEST_LOGGING_ENABLED:
    add_logging_middleware(app)

# Include API router
app.include_router(api_router)


# Add exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete payloads are client errors."""
    logger.warning(f"Request validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"
    error_location = f"{request.method} {request.url.path}"

    logger.bind(
        error_id=error_id,
        url=str(request.url),
        method=request.method,
        path_params=request.path_params,
        client_host=request.client.host if request.client else None
    ).opt(exception=exc).error("Unhandled exception in {}", error_location)

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error occurred",
            "error_id": error_id,
            "message": str(exc) if settings.DEBUG else "Internal server error"
        }
    )


# Add startup and shutdown event handlers
@app.on_event("startup")
async def startup_event():
    """Open the mapping store; the server must not start without it."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    store = URLRepository(get_engine(settings.DATABASE_URL))
    try:
        await store.initialize()
    except StorageError as e:
        logger.critical(f"Failed to initialize mapping store: {e}")
        await store.close()
        raise
    app.state.store = store
    logger.info("Mapping store initialized")


@app.on_event("shutdown")
async def shutdown_event():
    """Run cleanup tasks."""
    logger.info(f"Shutting down {settings.APP_NAME}")

    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()
        app.state.store = None
