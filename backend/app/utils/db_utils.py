"""Database utility functions."""
import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Error text fragments of failures worth another attempt
TRANSIENT_ERRORS = (
    "database is locked",
    "connection refused",
    "connection reset",
    "connection closed",
    "server closed",
    "timeout",
    "too many clients",
)


def _is_transient(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(fragment in message for fragment in TRANSIENT_ERRORS)


async def retry_on_lock(
    coro_func: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay: float = 0.1,
) -> T:
    """Run ``coro_func`` again on SQLite lock contention or dropped connections.

    The delay doubles after each failed attempt. Errors that are not transient,
    and the last transient one, are re-raised.
    """
    for attempt in range(1, max_retries + 1):
        try:
            return await coro_func()
        except (OperationalError, InterfaceError) as e:
            if attempt == max_retries or not _is_transient(e):
                raise
            delay = base_delay * (2 ** (attempt - 1))
            logger.warning(f"Database transient error, retrying in {delay}s (attempt {attempt}/{max_retries})")
            await asyncio.sleep(delay)


async def commit_unique(db: AsyncSession, on_conflict: Callable[[], Exception]) -> None:
    """Commit, turning a unique-constraint violation into ``on_conflict()``.

    The session is rolled back before the conflict error is raised.
    """
    try:
        await retry_on_lock(db.commit)
    except IntegrityError as e:
        await db.rollback()
        logger.info(f"Unique constraint rejected commit: {e.orig}")
        raise on_conflict() from e
