"""Run the shortener with uvicorn: ``python -m shortlink``."""

import uvicorn

from shortlink.core.config import settings


def main() -> None:
    uvicorn.run(
        "shortlink.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # Logging is configured by shortlink.core.logging
    )


if __name__ == "__main__":
    main()
