"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from shortl.models.link import (
    Link,
    LinkBase,
    LONG_URL_CONSTRAINT,
    SHORT_TOKEN_CONSTRAINT,
)

__all__ = [
    "Link",
    "LinkBase",
    "LONG_URL_CONSTRAINT",
    "SHORT_TOKEN_CONSTRAINT",
]
