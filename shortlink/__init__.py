"""URL shortener service: random tokens mapped to long URLs in SQLite."""

__version__ = "0.1.0"
