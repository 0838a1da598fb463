"""URL mapping data models.

This module defines the URLMapping model for storing token to target
mappings in the database.
"""
from sqlmodel import Field, SQLModel


class URLMappingBase(SQLModel):
    """Base model for mapping data."""

    target: str = Field(
        nullable=False,
        description="The original (long) URL to redirect to, stored verbatim"
    )


class URLMapping(URLMappingBase, table=True):
    """
    Mapping from a short token to its target URL.

    Rows are written once by the shorten operation and only ever read
    afterwards; there is no update or delete path.
    """

    __tablename__ = "urls"

    token: str = Field(
        primary_key=True,
        description="URL-safe token used in the short URL path"
    )
