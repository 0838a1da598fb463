"""Test utilities for URL shortener tests."""

import random
import string
from typing import Callable, Iterable


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def token_sequence(tokens: Iterable[str]) -> Callable[[], str]:
    """Token factory that hands out the given tokens in order."""
    iterator = iter(tokens)
    return lambda: next(iterator)
