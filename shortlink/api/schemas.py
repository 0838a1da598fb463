"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request schema for creating a shortened URL."""
    long_url: str = Field(..., min_length=1, description="URL to shorten, stored as given")


class ShortenResponse(BaseModel):
    """Response schema for a created short URL."""
    short_url: str  # Full URL including base address


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    errors: Optional[List[Dict[str, Any]]] = None  # Present for validation errors
