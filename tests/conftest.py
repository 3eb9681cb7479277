import os

# Select the test settings before anything imports `config`
os.environ["MODE"] = "test"

from datetime import date

import pytest
from sqlalchemy import create_engine, delete
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from config import settings
from main import app as fastapi_app
import db as project_db
import db_models  # noqa: F401  ensure models are registered
from db_base import Base
from db_models.asset import Asset
from db_models.borrow_record import BorrowRecord
from db_models.catalog import CATALOGS
from db_models.user import User
from core.deps import get_today
from core.security import get_password_hash, create_access_token

TEST_DATABASE_URL = settings.DATABASE_URL

# Fixed "today" for every request so overdue checks are deterministic
TODAY = date(2025, 3, 20)


def get_sync_url(url: str) -> str:
    return url.replace("sqlite+aiosqlite", "sqlite").replace("postgresql+asyncpg", "postgresql+psycopg2")


sync_engine = create_engine(get_sync_url(TEST_DATABASE_URL))
SyncSession = sessionmaker(bind=sync_engine)

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    future=True,
    echo=False,
    poolclass=NullPool,  # Disable connection pooling for tests
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Destructive: the test database is dropped and recreated
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def seed_users(prepare_db):
    """Staff accounts used by the auth tests and for bearer tokens."""
    with SyncSession() as session:
        desk = User(
            email="desk@test.com",
            hashed_password=get_password_hash("deskpass"),
            full_name="Equipment Desk",
            is_active=True,
        )
        nurse = User(
            email="nurse@test.com",
            hashed_password=get_password_hash("nursepass"),
            full_name="Ward Nurse",
            is_active=True,
        )
        retired = User(
            email="retired@test.com",
            hashed_password=get_password_hash("retiredpass"),
            full_name="Former Staff",
            is_active=False,
        )
        session.add_all([desk, nurse, retired])
        session.commit()


@pytest.fixture
def clean_ledger():
    """Empty borrows, assets and catalogs so counts in a test are exact."""
    with sync_engine.begin() as conn:
        conn.execute(delete(BorrowRecord))
        conn.execute(delete(Asset))
        for model in CATALOGS.values():
            conn.execute(delete(model))
    yield


@pytest.fixture
def seed_asset():
    """Insert an asset directly and return its primary key."""
    def _seed(**fields) -> int:
        with SyncSession() as session:
            asset = Asset(**fields)
            session.add(asset)
            session.commit()
            return asset.id
    return _seed


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
async def async_client():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session
    fastapi_app.dependency_overrides[get_today] = lambda: TODAY

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def desk_token():
    """JWT for the equipment desk account (id=1)."""
    return create_access_token(data={"sub": "1"})


@pytest.fixture(scope="session")
def auth_headers(desk_token):
    """Return authorization headers for the signed-in desk user."""
    return {"Authorization": f"Bearer {desk_token}"}
