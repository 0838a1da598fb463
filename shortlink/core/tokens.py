"""Token generation for short URLs.

Tokens are random bytes from the operating system's CSPRNG, encoded with the
URL-safe base64 alphabet and stripped of padding. They are unpredictable but
not guaranteed unique; uniqueness is enforced by the mapping store.
"""

import base64
import math
import re
import secrets

from shortlink.core.exceptions import EntropyError

TOKEN_BYTES = 6
TOKEN_LENGTH = 8
TOKEN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"

_TOKEN_CHARS = re.compile(r"^[A-Za-z0-9_-]+$")


def token_length(num_bytes: int) -> int:
    """Length of the unpadded encoding of ``num_bytes`` random bytes."""
    return math.ceil(num_bytes * 4 / 3)


def generate_token(num_bytes: int = TOKEN_BYTES) -> str:
    """
    Generate a random URL-safe token.

    Args:
        num_bytes: Number of random bytes to draw

    Returns:
        str: Token of ``token_length(num_bytes)`` characters from TOKEN_ALPHABET

    Raises:
        EntropyError: If the random source is unavailable
    """
    if num_bytes < 1:
        raise ValueError("num_bytes must be at least 1")
    try:
        raw = secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as e:
        raise EntropyError(f"Random source failed: {e}") from e
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def is_valid_token(value: str, num_bytes: int = TOKEN_BYTES) -> bool:
    """Check whether ``value`` looks like a token produced by generate_token."""
    if not isinstance(value, str) or len(value) != token_length(num_bytes):
        return False
    return bool(_TOKEN_CHARS.match(value))
