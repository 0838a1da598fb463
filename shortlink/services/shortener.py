"""URL shortening service for the URL shortener.

This module contains the ShortenerService class which implements the
save-or-regenerate loop for token allocation and builds short URLs.
"""

import logging
from functools import partial
from typing import Callable, NamedTuple, Optional

from shortlink.core.config import settings
from shortlink.core.exceptions import (
    DuplicateKeyError,
    InvalidInputError,
    TokenAllocationError,
)
from shortlink.core.tokens import generate_token
from shortlink.repositories.url_repository import URLRepository

logger = logging.getLogger(__name__)


class ShortenResult(NamedTuple):
    token: str
    short_url: str


class ShortenerService:
    """
    Service for URL shortening business logic.

    Tokens are random, so two calls may draw the same one. The store rejects
    the second insert and the service draws a fresh token, up to
    ``max_attempts`` times in total.
    """

    def __init__(
        self,
        repository: URLRepository,
        base_url: Optional[str] = None,
        max_attempts: Optional[int] = None,
        token_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            repository: Mapping store
            base_url: Prefix for short URLs (defaults to settings.BASE_URL)
            max_attempts: Tokens to try before giving up (defaults to settings.TOKEN_SAVE_ATTEMPTS)
            token_factory: Zero-argument callable returning a new token
                (defaults to generate_token with settings.TOKEN_BYTES)
        """
        if max_attempts is None:
            max_attempts = settings.TOKEN_SAVE_ATTEMPTS
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.repository = repository
        self.base_url = (base_url if base_url is not None else settings.BASE_URL).rstrip("/")
        self.max_attempts = max_attempts
        self.token_factory = token_factory or partial(generate_token, settings.TOKEN_BYTES)

    async def shorten(self, long_url: Optional[str]) -> ShortenResult:
        """
        Store a new mapping for ``long_url`` under a freshly generated token.

        Args:
            long_url: The URL to shorten, stored verbatim

        Returns:
            ShortenResult: The token and the full short URL

        Raises:
            InvalidInputError: If long_url is missing or empty
            TokenAllocationError: If every generated token collided
            EntropyError: If the random source failed
            StorageError: If the store failed to write
        """
        if not long_url:
            raise InvalidInputError("long_url must not be empty")

        for attempt in range(1, self.max_attempts + 1):
            token = self.token_factory()
            try:
                await self.repository.save(token, long_url)
            except DuplicateKeyError:
                logger.warning(
                    f"Token collision on attempt {attempt}/{self.max_attempts}, regenerating"
                )
                continue
            logger.info(f"Created mapping {token}")
            return ShortenResult(token=token, short_url=self.build_short_url(token))

        raise TokenAllocationError(
            f"Failed to allocate a unique token after {self.max_attempts} attempts"
        )

    async def resolve(self, token: str) -> str:
        """
        Get the target URL for a token.

        Raises:
            NotFoundError: If no mapping exists for the token
            StorageError: If the store failed to read
        """
        return await self.repository.resolve(token)

    def build_short_url(self, token: str) -> str:
        return f"{self.base_url}/{token}"
