"""Repository layer for the URL shortener application.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from shortl.repositories.base import (
    BaseRepository,
    RepositoryError,
    DuplicateEntityError,
    violated_constraint,
)
from shortl.repositories.link_repository import LinkRepository

__all__ = [
    # Base classes and exceptions
    "BaseRepository",
    "RepositoryError",
    "DuplicateEntityError",
    "violated_constraint",

    # Concrete repositories
    "LinkRepository",
]
