# core/store.py
"""
Store access policy shared by every feature.

Writes are committed immediately; a rejected commit is rolled back and
surfaced as StoreWriteError carrying the backend's message. Full-collection
reads go through fetch_all, which applies READ_FAILURE_POLICY.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings

logger = logging.getLogger(__name__)


class StoreWriteError(Exception):
    """Raised when the database rejects a write."""
    pass


class StoreReadError(Exception):
    """Raised when a collection read fails and the policy is 'raise'."""
    pass


def backend_message(exc: SQLAlchemyError) -> str:
    """Best human-readable text for a driver error."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


async def commit_or_raise(db: AsyncSession) -> None:
    """Commit the session, rolling back and raising StoreWriteError on failure."""
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StoreWriteError(backend_message(exc)) from exc


async def fetch_all(db: AsyncSession, stmt, *, what: str, policy: str | None = None) -> list:
    """
    Execute a full-collection select and return the ORM rows.

    With policy "empty" a failed read is logged and treated as no data;
    with "raise" it becomes StoreReadError.
    """
    policy = policy or settings.READ_FAILURE_POLICY
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as exc:
        if policy == "empty":
            logger.warning("Reading %s failed, treating as empty: %s", what, backend_message(exc))
            await db.rollback()
            return []
        raise StoreReadError(f"Could not load {what}: {backend_message(exc)}") from exc
    return list(result.scalars().all())
