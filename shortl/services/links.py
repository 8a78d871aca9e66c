"""Link lifecycle service for the URL shortener application.

This module contains the LinkService class which implements the three
operations of the service: shortening a URL, resolving a short token for a
redirect, and reading a link's statistics.
"""

import asyncio
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shortl.core.config import settings
from shortl.db.session import db_transaction
from shortl.models.link import Link
from shortl.repositories.base import DuplicateEntityError, RepositoryError
from shortl.repositories.link_repository import LinkRepository
from shortl.services.exceptions import (
    BadRequestError,
    InvalidURLError,
    LinkNotFoundError,
    StoreUnavailableError,
    TokenCollisionError,
)
from shortl.services.tokens import generate_token
from shortl.services.validation import is_valid_url

logger = logging.getLogger(__name__)

# Failures of the backing store, whatever layer they surface from
STORE_FAILURES = (RepositoryError, SQLAlchemyError, asyncio.TimeoutError)


def default_token_factory() -> str:
    return generate_token(settings.TOKEN_LENGTH, settings.TOKEN_ALPHABET)


class LinkService:
    """
    Service for the shortened-link lifecycle.

    The service holds no state of its own. Each public operation runs in
    one transaction on the caller's session, and store failures are
    reported as StoreUnavailableError with the detail kept in the logs.
    """

    def __init__(
        self,
        link_repository: LinkRepository,
        token_factory: Optional[Callable[[], str]] = None,
        collision_retries: Optional[int] = None,
    ):
        """
        Initialize the link service.

        Args:
            link_repository: Repository for link data access
            token_factory: Produces candidate short tokens
            collision_retries: Extra attempts with a fresh token after a
                token collision, ``TOKEN_COLLISION_RETRIES`` by default
        """
        self.link_repository = link_repository
        self.token_factory = token_factory or default_token_factory
        self.collision_retries = (
            settings.TOKEN_COLLISION_RETRIES if collision_retries is None else collision_retries
        )

    async def shorten(self, db: AsyncSession, long_url: str) -> Link:
        """
        Shorten a URL, or return the existing link if it was shortened before.

        Shortening a known URL keeps its token and increments its
        ``shorten_count``.

        Args:
            db: Database session
            long_url: The URL to shorten

        Returns:
            Link: The new or existing link

        Raises:
            InvalidURLError: If the URL is not an absolute http(s) URL
            TokenCollisionError: If every generated token was already taken
            StoreUnavailableError: If the store fails
        """
        if not is_valid_url(long_url):
            raise InvalidURLError(f"Invalid URL: {long_url!r}")

        attempts = self.collision_retries + 1
        for attempt in range(1, attempts + 1):
            token = self.token_factory()
            try:
                return await self._store_link(db, long_url, token)
            except DuplicateEntityError:
                logger.warning(f"Short token collision on attempt {attempt}/{attempts}")
            except STORE_FAILURES as e:
                logger.error(f"Store failure while shortening {long_url}: {e!r}")
                raise StoreUnavailableError("The link store is unavailable") from e

        raise TokenCollisionError(
            f"Could not allocate an unused short token after {attempts} attempt(s)"
        )

    @db_transaction(db_param_name="db")
    async def _store_link(self, db: AsyncSession, long_url: str, token: str) -> Link:
        return await self.link_repository.upsert_link(db, long_url, token)

    async def resolve_redirect(self, db: AsyncSession, token: str) -> str:
        """
        Resolve a short token to its long URL, counting one view.

        Args:
            db: Database session
            token: The requested short token

        Returns:
            str: The long URL to redirect to

        Raises:
            LinkNotFoundError: If no link has this token (nothing is counted)
            StoreUnavailableError: If the store fails (nothing is counted)
        """
        try:
            return await self._count_view(db, token)
        except STORE_FAILURES as e:
            logger.error(f"Store failure while resolving token {token}: {e!r}")
            raise StoreUnavailableError("The link store is unavailable") from e

    @db_transaction(db_param_name="db")
    async def _count_view(self, db: AsyncSession, token: str) -> str:
        long_url = await self.link_repository.increment_view_count(db, token)
        if long_url is None:
            raise LinkNotFoundError(f"No link with token '{token}'")
        return long_url

    async def get_stats(
        self,
        db: AsyncSession,
        long_url: Optional[str] = None,
        short_token: Optional[str] = None,
    ) -> Link:
        """
        Read a link's statistics by long URL or by short token.

        A non-empty ``long_url`` takes precedence; ``short_token`` is then
        ignored even if it names a different link.

        Raises:
            BadRequestError: If both keys are empty (the store is not queried)
            LinkNotFoundError: If no link matches
            StoreUnavailableError: If the store fails
        """
        if not long_url and not short_token:
            raise BadRequestError("Either a long URL or a short token is required")
        lookup = f"long URL {long_url}" if long_url else f"token '{short_token}'"

        try:
            link = await self._find_link(db, long_url, short_token)
        except STORE_FAILURES as e:
            logger.error(f"Store failure while reading stats for {lookup}: {e!r}")
            raise StoreUnavailableError("The link store is unavailable") from e

        if link is None:
            raise LinkNotFoundError(f"No link with {lookup}")
        return link

    @db_transaction(db_param_name="db")
    async def _find_link(
        self, db: AsyncSession, long_url: Optional[str], short_token: Optional[str]
    ) -> Optional[Link]:
        if long_url:
            return await self.link_repository.get_by_long_url(db, long_url)
        return await self.link_repository.get_by_token(db, short_token)
