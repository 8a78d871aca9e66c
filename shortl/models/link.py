"""Link data model.

This module defines the Link model that maps a long URL to its short token
together with its usage counters.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from shortl.core.config import settings

LONG_URL_CONSTRAINT = "uq_links_long_url"
SHORT_TOKEN_CONSTRAINT = "uq_links_short_token"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LinkBase(SQLModel):
    """Fields shared by the table model and its read schema."""

    long_url: str = Field(
        description="The validated redirect target"
    )
    short_token: str = Field(
        max_length=settings.TOKEN_LENGTH,
        description="Short alphabetic token used as the redirect key",
    )
    view_count: int = Field(
        default=0,
        ge=0,
        description="Number of successful redirects through this link"
    )
    shorten_count: int = Field(
        default=0,
        ge=0,
        description="Number of repeated shorten requests for the same long URL"
    )


class Link(LinkBase, table=True):
    """
    A shortened link.

    There is exactly one row per long URL and short tokens are globally
    unique. Rows are never deleted; only the two counters change after
    creation.
    """

    __tablename__ = "links"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        description="Timestamp when the link was first shortened"
    )

    # Named so a violation can be attributed to the column it protects
    __table_args__ = (
        UniqueConstraint("long_url", name=LONG_URL_CONSTRAINT),
        UniqueConstraint("short_token", name=SHORT_TOKEN_CONSTRAINT),
    )

