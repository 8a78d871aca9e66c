"""Tests for short token redirection."""

from unittest.mock import AsyncMock, patch

import pytest

from shortl.api.dependencies import get_link_service
from shortl.services.exceptions import StoreUnavailableError
from tests.utils import create_test_link


@pytest.mark.api
class TestRedirectEndpoint:

    @pytest.mark.asyncio
    async def test_redirect_known_token(self, async_client, test_db, link_repository):
        link = await create_test_link(test_db, short_token="GoHere")

        response = await async_client.get("/GoHere")

        assert response.status_code == 302
        assert response.headers["location"] == link.long_url

        stored = await link_repository.get_by_token(test_db, "GoHere")
        assert stored.view_count == 1

    @pytest.mark.asyncio
    async def test_redirect_unknown_token(self, async_client, test_db, link_repository):
        await create_test_link(test_db, short_token="Stays0", view_count=2)

        response = await async_client.get("/Missing")

        assert response.status_code == 404
        assert response.text == "This short link does not exist"

        stored = await link_repository.get_by_token(test_db, "Stays0")
        assert stored.view_count == 2

    @pytest.mark.asyncio
    async def test_redirect_logs_access(self, async_client, test_db):
        link = await create_test_link(test_db, short_token="Logged")

        with patch("shortl.api.routes.redirect.log_link_access") as log_access:
            response = await async_client.get("/Logged", headers={"user-agent": "pytest-agent"})

        assert response.status_code == 302
        log_access.assert_called_once()
        kwargs = log_access.call_args.kwargs
        assert kwargs["token"] == "Logged"
        assert kwargs["long_url"] == link.long_url
        assert kwargs["user_agent"] == "pytest-agent"

    @pytest.mark.asyncio
    async def test_redirect_store_failure(self, async_client, test_app):
        service = AsyncMock()
        service.resolve_redirect.side_effect = StoreUnavailableError("down")
        test_app.dependency_overrides[get_link_service] = lambda: service

        response = await async_client.get("/AnyTok")

        assert response.status_code == 500
        assert response.text == "An unknown error occurred. The database threw an error"
