"""Link Repository for the URL shortener application.

This module provides the LinkRepository class, the persistence side of the
link lifecycle: the shorten upsert, the counted redirect lookup and the
statistics reads. Every mutation is a single statement so concurrent
requests touching the same row cannot lose updates.
"""

import logging
from typing import Optional

from sqlalchemy import update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shortl.models.link import Link, SHORT_TOKEN_CONSTRAINT, utcnow
from shortl.repositories.base import (
    BaseRepository,
    DuplicateEntityError,
    RepositoryError,
    violated_constraint,
)

logger = logging.getLogger(__name__)

# Dialects offering INSERT ... ON CONFLICT DO UPDATE ... RETURNING
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class LinkRepository(BaseRepository[Link]):
    """
    Repository for Link model database operations.

    Methods take the request's session and never commit; transaction
    boundaries belong to the caller.
    """

    def __init__(self):
        """Initialize the repository with the Link model type."""
        super().__init__(Link)

    def _upsert_insert(self, db: AsyncSession):
        dialect = db.get_bind().dialect.name
        try:
            return UPSERT_INSERTS[dialect]
        except KeyError:
            raise RepositoryError(f"Upsert is not supported on the {dialect} dialect") from None

    async def upsert_link(self, db: AsyncSession, long_url: str, short_token: str) -> Link:
        """
        Insert a new link, or count a repeated shorten of an existing one.

        Runs as one ``INSERT ... ON CONFLICT (long_url) DO UPDATE`` statement:
        a new URL gets a row with ``short_token`` and zeroed counters, a known
        URL keeps its row and token and has ``shorten_count`` incremented.

        Args:
            db: Database session
            long_url: The validated long URL
            short_token: Candidate token used only if the URL is new

        Returns:
            The inserted or existing Link, freshly loaded from the statement

        Raises:
            DuplicateEntityError: If ``short_token`` already belongs to another link
            RepositoryError: On other database errors
        """
        insert = self._upsert_insert(db)
        stmt = insert(self.model_type).values(
            long_url=long_url,
            short_token=short_token,
            view_count=0,
            shorten_count=0,
            created_at=utcnow(),
        )
        stmt = (
            stmt.on_conflict_do_update(
                index_elements=["long_url"],
                set_={"shorten_count": self.model_type.shorten_count + 1},
            )
            .returning(self.model_type)
            .execution_options(populate_existing=True)
        )

        try:
            result = await db.execute(stmt)
            return result.scalar_one()
        except IntegrityError as e:
            constraint = violated_constraint(e)
            await db.rollback()
            if constraint is None and await self.check_token_exists(db, short_token):
                # Driver gave no constraint name; the token already being taken identifies it
                constraint = SHORT_TOKEN_CONSTRAINT
            if constraint == SHORT_TOKEN_CONSTRAINT:
                raise DuplicateEntityError(self.model_type, "short_token", short_token) from e
            logger.error(f"Integrity error shortening {long_url} (constraint {constraint}): {e}")
            raise RepositoryError(f"Database error creating link: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting link for {long_url}: {e}")
            raise RepositoryError(f"Database error creating link: {e}") from e

    async def increment_view_count(self, db: AsyncSession, short_token: str) -> Optional[str]:
        """
        Count one view of a link and return where it points.

        The lookup and the increment are one ``UPDATE ... RETURNING`` statement,
        so a view is counted exactly when a target is returned.

        Args:
            db: Database session
            short_token: The token requested by the visitor

        Returns:
            The link's long URL, or None if the token is unknown

        Raises:
            RepositoryError: On database errors
        """
        try:
            stmt = (
                update(self.model_type)
                .where(self.model_type.short_token == short_token)
                .values(view_count=self.model_type.view_count + 1)
                .returning(self.model_type.long_url)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error incrementing view count: {e}") from e

    async def get_by_token(self, db: AsyncSession, short_token: str) -> Optional[Link]:
        """Find a link by its short token."""
        return await self.get_one_by(db, short_token=short_token)

    async def get_by_long_url(self, db: AsyncSession, long_url: str) -> Optional[Link]:
        """Find a link by the long URL it points to."""
        return await self.get_one_by(db, long_url=long_url)

    async def check_token_exists(self, db: AsyncSession, short_token: str) -> bool:
        """Check whether a short token is already in use."""
        return await self.exists(db, short_token=short_token)
