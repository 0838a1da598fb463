"""
Core logging module.

This module configures the application logging with Loguru.
"""

import logging
import os
import sys
from datetime import datetime, timezone

from loguru import logger

from shortlink.core.config import settings

URL_ACCESS_EVENT = "url_access"

url_access_logger = logger.bind(event_type=URL_ACCESS_EVENT)


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.

    The repository, service and database modules log through the standard
    library; this handler hands their records to loguru so that every
    message ends up in the same sinks.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Try to get corresponding Loguru level or use level number
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _not_url_access(record) -> bool:
    return record["extra"].get("event_type") != URL_ACCESS_EVENT


def _is_url_access(record) -> bool:
    return record["extra"].get("event_type") == URL_ACCESS_EVENT


def setup_logging():
    """
    Configure application logging using Loguru.

    This sets up Loguru with proper formatting, log levels, and handlers,
    and also intercepts standard library logging.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=settings.LOG_FORMAT,
        backtrace=settings.DEBUG,
        diagnose=settings.DEBUG,
        filter=_not_url_access,
    )

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_file_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)

        if settings.LOG_JSON:
            logger.add(
                log_file_path,
                level=settings.LOG_LEVEL,
                serialize=True,
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                compression="gz",
                filter=_not_url_access,
            )
        else:
            logger.add(
                log_file_path,
                level=settings.LOG_LEVEL,
                format=settings.LOG_FORMAT,
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                compression="gz",
                filter=_not_url_access,
            )

        if settings.URL_ACCESS_LOGGING_ENABLED:
            logger.add(
                os.path.join(settings.LOG_DIR, "url_access.log"),
                format="{time:YYYY-MM-DD HH:mm:ss.SSS} | IP:{extra[ip]} | Token:{extra[token]} | {message}",
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                enqueue=True,
                level="INFO",
                filter=_is_url_access,
            )

    # Register custom log level for request logs
    try:
        logger.level("REQUEST")
    except ValueError:
        logger.level("REQUEST", no=25, color="<green>")

    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for log_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi"]:
        logging_logger = logging.getLogger(log_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    return logger


def log_url_access(token: str, ip_address: str, user_agent: str = "") -> None:
    """
    Record a redirect hit as a URL access event.

    Args:
        token: The token that was resolved
        ip_address: The client's IP address
        user_agent: Optional user agent string
    """
    if not settings.URL_ACCESS_LOGGING_ENABLED:
        return
    url_access_logger.bind(
        ip=ip_address,
        token=token,
        user_agent=user_agent,
        timestamp=datetime.now(timezone.utc).isoformat(),
    ).info(f"URL accessed: {token}")
