"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request body for shortening a URL.

    Scheme and format checks are done by the link service.
    """
    url: Optional[str] = None


class ShortenResponse(BaseModel):
    """Response body naming the short token of a link."""
    shortl: str


class StatsResponse(BaseModel):
    """Response body with a link's usage statistics."""
    url: str
    shortl: str
    view_count: int = Field(ge=0)
    shorten_count: int = Field(ge=0)

    @classmethod
    def from_link(cls, link) -> "StatsResponse":
        return cls(
            url=link.long_url,
            shortl=link.short_token,
            view_count=link.view_count,
            shorten_count=link.shorten_count,
        )
