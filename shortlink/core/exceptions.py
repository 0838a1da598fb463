"""Exceptions for the URL shortener.

This module contains the exception hierarchy shared by the token generator,
the mapping store and the service layer. Routes translate these into HTTP
responses; nothing below the API layer knows about status codes.
"""


class ShortlinkError(Exception):
    """Base exception for all shortener errors."""
    pass


class InvalidInputError(ShortlinkError):
    """A required value is missing or empty."""
    pass


class DuplicateKeyError(ShortlinkError):
    """A mapping with this token already exists."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Mapping with token={token} already exists")


class NotFoundError(ShortlinkError):
    """No mapping exists for the requested token."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"No mapping found for token '{token}'")


class StorageError(ShortlinkError):
    """The backing store failed to open, migrate, read or write."""
    pass


class TokenAllocationError(StorageError):
    """Every generated token collided with an existing mapping."""
    pass


class EntropyError(ShortlinkError):
    """The operating system's random source failed."""
    pass
