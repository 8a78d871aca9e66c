"""Base repository implementation for the URL shortener application.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Generic, Optional, Type, TypeVar
import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

# Type variable for model types
T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


def violated_constraint(error: IntegrityError) -> Optional[str]:
    """
    Name of the constraint an IntegrityError reports, if the driver exposes it.

    asyncpg keeps it on the original driver exception (``constraint_name``),
    psycopg on its diagnostics (``diag.constraint_name``). SQLite does not
    report it, in which case None is returned.
    """
    orig = getattr(error, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
        diag = getattr(candidate, "diag", None)
        name = getattr(diag, "constraint_name", None)
        if name:
            return name
    return None


class BaseRepository(Generic[T]):
    """
    Base repository implementing common read operations for SQLModel entities.

    Type parameters:
        T: The SQLModel type this repository manages
    """

    def __init__(self, model_type: Type[T]):
        """
        Initialize the repository with a specific model type.

        Args:
            model_type: The SQLModel class this repository will work with
        """
        self.model_type = model_type

    async def get_one_by(self, db: AsyncSession, **filters) -> Optional[T]:
        """
        Get the single entity matching all field=value filters.

        Rows already present in the session are refreshed from the query
        result so counters updated by bulk statements are never stale.

        Raises:
            RepositoryError: On database errors
        """
        if not filters:
            raise ValueError("No conditions provided for lookup")
        try:
            conditions = [getattr(self.model_type, field) == value for field, value in filters.items()]
            query = (
                select(self.model_type)
                .where(*conditions)
                .execution_options(populate_existing=True)
            )
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} by {list(filters)}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {e}") from e

    async def exists(self, db: AsyncSession, **kwargs) -> bool:
        """
        Check if an entity exists with the given filters.

        Args:
            db: Database session
            **kwargs: Field=value pairs to filter by

        Returns:
            True if entity exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        if not kwargs:
            raise ValueError("No conditions provided for exists check")
        try:
            conditions = [getattr(self.model_type, field) == value for field, value in kwargs.items()]
            query = select(func.count()).select_from(self.model_type).where(*conditions)
            result = await db.execute(query)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error checking entity existence: {e}") from e
