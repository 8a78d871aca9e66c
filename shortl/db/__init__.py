"""Database module for the URL shortener application."""
from shortl.db.base import engine, get_engine, get_session, init_models, DatabaseHealthCheck
from shortl.db.session import get_db, db_transaction, safe_rollback

__all__ = [
    "engine",
    "get_engine",
    "get_session",
    "init_models",
    "DatabaseHealthCheck",
    "get_db",
    "db_transaction",
    "safe_rollback",
]
