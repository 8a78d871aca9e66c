"""Test utilities for URL shortener tests."""

import random
import string
from typing import Optional

from sqlalchemy import func, select

from shortl.models.link import Link


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_token(length: int = 6) -> str:
    """Generate a random token in the shape the service issues."""
    return ''.join(random.choice(string.ascii_letters) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_link(
    db,
    long_url: Optional[str] = None,
    short_token: Optional[str] = None,
    view_count: int = 0,
    shorten_count: int = 0,
) -> Link:
    """Create and commit a test Link in the database."""
    link = Link(
        long_url=long_url or random_url(),
        short_token=short_token or random_token(),
        view_count=view_count,
        shorten_count=shorten_count,
    )
    db.add(link)
    await db.commit()
    await db.refresh(link)
    return link


async def count_links(db) -> int:
    """Count the stored links."""
    result = await db.execute(select(func.count()).select_from(Link))
    return result.scalar_one()
