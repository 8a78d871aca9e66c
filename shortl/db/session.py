"""Session management for database operations.

This module provides utilities for handling SQLAlchemy async sessions
with proper lifecycle management, error handling, and transaction support.
It includes dependency injection patterns optimized for FastAPI.
"""

from typing import AsyncGenerator, Callable, Optional, TypeVar
import asyncio
import inspect
import logging
from functools import wraps

from sqlalchemy.ext.asyncio import AsyncSession

from shortl.core.config import settings
from shortl.db.base import get_session

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions.

    Each request gets one session for its whole duration. The session is
    released back to the pool when the request finishes, whatever the
    outcome.

    Yields:
        AsyncSession: A SQLAlchemy async session object.
    """
    async with get_session() as session:
        try:
            yield session
        except Exception:
            await safe_rollback(session, "request")
            raise


async def safe_rollback(db: AsyncSession, context: str) -> None:
    """Roll back the current transaction, logging instead of raising on failure.

    A failed rollback must never replace the error that triggered it.
    """
    try:
        await db.rollback()
    except Exception:
        logger.exception(f"Rollback failed in '{context}'")


def db_transaction(db_param_name: str = "db", timeout: Optional[float] = None) -> Callable:
    """Decorator to run a coroutine function as a single database transaction.

    The session is looked up among the call arguments by ``db_param_name``.
    The wrapped call is bounded by ``timeout`` seconds (``DB_OPERATION_TIMEOUT``
    when omitted); on success the transaction is committed, on any error,
    including a timeout or a failed commit, it is rolled back and the error
    is re-raised.

    Args:
        db_param_name: Name of the AsyncSession parameter of the wrapped function.
        timeout: Optional override of the unit-of-work timeout in seconds.

    Example:
        ```python
        @db_transaction()
        async def bump(db: AsyncSession, token: str) -> None:
            ...
        ```
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        func_signature = inspect.signature(func)
        if db_param_name not in func_signature.parameters:
            raise ValueError(
                f"Function '{func.__name__}' has no parameter named '{db_param_name}'"
            )

        @wraps(func)
        async def wrapper(*args, **kwargs):
            bound = func_signature.bind_partial(*args, **kwargs)
            db = bound.arguments.get(db_param_name)
            if not isinstance(db, AsyncSession):
                raise ValueError(
                    f"Database session not found in arguments for '{func.__name__}'. "
                    f"Pass an AsyncSession as '{db_param_name}'."
                )

            limit = timeout if timeout is not None else settings.DB_OPERATION_TIMEOUT
            try:
                result = await asyncio.wait_for(func(*args, **kwargs), timeout=limit)
                await db.commit()
                return result
            except Exception:
                await safe_rollback(db, func.__name__)
                logger.debug(f"Transaction rolled back in '{func.__name__}'")
                raise

        return wrapper
    return decorator

