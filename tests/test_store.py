import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from core.store import StoreReadError, StoreWriteError, commit_or_raise, fetch_all
from db_models.asset import Asset


class BrokenSession:
    """Session stand-in whose database calls fail."""

    def __init__(self):
        self.rolled_back = False

    async def execute(self, stmt):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk full"))

    async def rollback(self):
        self.rolled_back = True


@pytest.mark.anyio
async def test_read_failure_raises_by_default():
    with pytest.raises(StoreReadError, match="connection refused"):
        await fetch_all(BrokenSession(), select(Asset), what="assets", policy="raise")


@pytest.mark.anyio
async def test_read_failure_as_empty():
    session = BrokenSession()
    assert await fetch_all(session, select(Asset), what="assets", policy="empty") == []
    assert session.rolled_back


@pytest.mark.anyio
async def test_write_failure_rolls_back():
    session = BrokenSession()
    with pytest.raises(StoreWriteError, match="disk full"):
        await commit_or_raise(session)
    assert session.rolled_back
