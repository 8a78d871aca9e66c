"""Tests for the link repository."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from shortl.models.link import Link
from shortl.repositories.link_repository import DuplicateEntityError
from tests.utils import count_links, create_test_link, random_url


@pytest.mark.repository
class TestLinkRepository:
    """Test suite for link repository."""

    @pytest.mark.asyncio
    async def test_upsert_creates_link(self, test_db, link_repository):
        """A new long URL gets a row with the candidate token and zeroed counters."""
        long_url = random_url()

        link = await link_repository.upsert_link(test_db, long_url, "NewTok")
        await test_db.commit()

        assert link.long_url == long_url
        assert link.short_token == "NewTok"
        assert link.view_count == 0
        assert link.shorten_count == 0

        db_link = await link_repository.get_by_token(test_db, "NewTok")
        assert db_link is not None
        assert db_link.long_url == long_url

    @pytest.mark.asyncio
    async def test_upsert_records_creation_time(self, test_db, link_repository):
        """The creation time is stored in UTC on insert."""
        before = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(seconds=1)

        link = await link_repository.upsert_link(test_db, random_url(), "Timed1")
        await test_db.commit()

        # SQLite keeps the UTC wall time without its offset
        created = link.created_at.replace(tzinfo=None)
        assert before <= created <= datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_upsert_existing_url_keeps_token(self, test_db, link_repository):
        """Resubmitting a long URL counts the repeat and keeps the first token."""
        long_url = random_url()
        await link_repository.upsert_link(test_db, long_url, "FirstT")
        await test_db.commit()

        again = await link_repository.upsert_link(test_db, long_url, "Second")
        await test_db.commit()

        assert again.short_token == "FirstT"
        assert again.shorten_count == 1

        result = await test_db.execute(select(Link).where(Link.long_url == long_url))
        rows = result.scalars().all()
        assert len(rows) == 1
        assert await link_repository.check_token_exists(test_db, "Second") is False

    @pytest.mark.asyncio
    async def test_upsert_token_collision(self, test_db, link_repository):
        """A candidate token owned by another URL is reported as a duplicate token."""
        existing = await create_test_link(test_db, short_token="Taken")
        # The failed upsert rolls the session back, which expires loaded rows
        existing_url = existing.long_url

        with pytest.raises(DuplicateEntityError) as excinfo:
            await link_repository.upsert_link(test_db, random_url(), "Taken")

        assert excinfo.value.field_name == "short_token"
        assert excinfo.value.value == "Taken"

        # The existing link is untouched and no new row was written
        assert await count_links(test_db) == 1
        db_link = await link_repository.get_by_token(test_db, "Taken")
        assert db_link.long_url == existing_url
        assert db_link.shorten_count == 0

    @pytest.mark.asyncio
    async def test_increment_view_count(self, test_db, link_repository):
        """A known token returns its long URL and counts exactly one view."""
        link = await create_test_link(test_db, short_token="Viewed", view_count=5)

        long_url = await link_repository.increment_view_count(test_db, "Viewed")
        await test_db.commit()

        assert long_url == link.long_url
        db_link = await link_repository.get_by_token(test_db, "Viewed")
        assert db_link.view_count == 6

    @pytest.mark.asyncio
    async def test_increment_view_count_unknown_token(self, test_db, link_repository):
        """An unknown token returns None and changes nothing."""
        await create_test_link(test_db, short_token="Other", view_count=2)

        assert await link_repository.increment_view_count(test_db, "Nope") is None

        db_link = await link_repository.get_by_token(test_db, "Other")
        assert db_link.view_count == 2

    @pytest.mark.asyncio
    async def test_get_by_long_url(self, test_db, link_repository):
        link = await create_test_link(test_db)

        db_link = await link_repository.get_by_long_url(test_db, link.long_url)

        assert db_link is not None
        assert db_link.id == link.id
        assert await link_repository.get_by_long_url(test_db, random_url()) is None

    @pytest.mark.asyncio
    async def test_get_by_token_nonexistent(self, test_db, link_repository):
        assert await link_repository.get_by_token(test_db, "nonexistent") is None

    @pytest.mark.asyncio
    async def test_check_token_exists(self, test_db, link_repository):
        await create_test_link(test_db, short_token="Exists")

        assert await link_repository.check_token_exists(test_db, "Exists") is True
        assert await link_repository.check_token_exists(test_db, "Absent") is False
