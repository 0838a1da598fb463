"""Database module for the URL shortener."""
from shortlink.db.base import create_schema, get_engine, get_session_factory
from shortlink.db.session import read_context, transaction_context

__all__ = [
    "create_schema",
    "get_engine",
    "get_session_factory",
    "read_context",
    "transaction_context",
]
