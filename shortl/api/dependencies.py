"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access repository and service instances.
"""

from fastapi import Depends

from shortl.repositories.link_repository import LinkRepository
from shortl.services.links import LinkService


async def get_link_repository() -> LinkRepository:
    """Get an instance of the link repository."""
    return LinkRepository()


async def get_link_service(
    link_repo: LinkRepository = Depends(get_link_repository),
) -> LinkService:
    """Get an instance of the link service."""
    return LinkService(link_repository=link_repo)
