"""Tests for application startup and shutdown."""

from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from shortl.core.config import settings
from shortl.main import app


def test_startup_creates_tables_and_shutdown_disposes_engine(monkeypatch):
    monkeypatch.setattr(settings, "DB_CREATE_TABLES", True)
    engine = MagicMock()
    engine.dispose = AsyncMock()

    with patch("shortl.main.init_models", new=AsyncMock()) as init_models, \
            patch("shortl.main.engine", new=engine):
        with TestClient(app) as client:
            init_models.assert_awaited_once()
            engine.dispose.assert_not_awaited()
            assert client.get("/api/health/live").status_code == 200

        engine.dispose.assert_awaited_once()


def test_startup_skips_table_creation_when_disabled(monkeypatch):
    monkeypatch.setattr(settings, "DB_CREATE_TABLES", False)

    with patch("shortl.main.init_models", new=AsyncMock()) as init_models:
        with TestClient(app):
            pass

    init_models.assert_not_awaited()
