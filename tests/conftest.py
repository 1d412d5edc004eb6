"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator
from pathlib import Path

# Must be set before any app imports that trigger Settings validation
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("API_TMDB_TOKEN", "test-tmdb-token")
# Keep key derivation cheap in tests
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"

import httpx  # noqa: E402
import pytest  # noqa: E402
import respx  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from db.session import configure_sqlite, init_db  # noqa: E402
from services.catalog_gateway import CatalogGateway  # noqa: E402
from tests.factories import TMDB_API_URL, TMDB_IMAGE_BASE_URL  # noqa: E402


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """A throwaway SQLite database file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine for testing."""
    engine = configure_sqlite(create_async_engine(database_url, echo=False))
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_connection(async_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection]:
    """
    Create a connection with a transaction that will be rolled back after the test.

    This provides test isolation - each test runs in its own transaction
    that is rolled back, so tests don't affect each other.
    """
    async with async_engine.connect() as connection:
        transaction = await connection.begin()
        try:
            yield connection
        finally:
            await transaction.rollback()


@pytest.fixture
async def db_session(db_connection: AsyncConnection) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session bound to the test transaction.

    Uses begin_nested() for savepoints, allowing the session's flush/commit
    to work within our outer test transaction.
    """
    session_factory = async_sessionmaker(
        bind=db_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_tmdb() -> respx.MockRouter:
    """Mock the catalog provider. Routes not registered by a test fail the request."""
    with respx.mock(base_url=TMDB_API_URL, assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
async def catalog_gateway(mock_tmdb: respx.MockRouter) -> AsyncGenerator[CatalogGateway]:
    """Catalog gateway whose HTTP traffic goes to the respx mock."""
    client = httpx.AsyncClient(
        base_url=TMDB_API_URL,
        headers={"Authorization": "Bearer test-tmdb-token"},
    )
    gateway = CatalogGateway(client, image_base_url=TMDB_IMAGE_BASE_URL, language="en-US")
    yield gateway
    await gateway.aclose()


@pytest.fixture
async def client(
    db_session: AsyncSession,
    catalog_gateway: CatalogGateway,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session and catalog gateway overrides."""
    # Clear the settings cache so it picks up the test environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.dependencies import get_catalog_gateway
    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_catalog_gateway] = lambda: catalog_gateway

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def _register(client: AsyncClient, username: str, password: str) -> str:
    response = await client.post(
        "/auth/register",
        json={"username": username, "password": password, "confirm_password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["token"]


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Register 'alice' and return headers carrying her session token."""
    token = await _register(client, "alice", "Passw0rd")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def other_auth_headers(client: AsyncClient) -> dict[str, str]:
    """Register 'bob' and return headers carrying his session token."""
    token = await _register(client, "bob", "Secr3tPass")
    return {"Authorization": f"Bearer {token}"}
