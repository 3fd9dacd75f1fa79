"""
Bookmarks API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── sample_bookmarks:   three valid BookmarkRecords
    ├── xss_bookmark:       malicious record + its expected sanitized form
    ├── memory_store:       InMemoryBookmarkStore seeded with sample_bookmarks
    ├── test_settings:      Settings for the "test" environment
    ├── test_client:        authenticated HTTPX AsyncClient over the ASGI app
    ├── anonymous_client:   same app, no Authorization header
    ├── client_factory:     clients for apps with other settings / stores
    └── sql_session:        AsyncSession on an in-memory aiosqlite database
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["API_TOKEN"] = "test-api-token"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookmarks_api.config import Settings
from bookmarks_api.database import Base
from bookmarks_api.dependencies import get_bookmark_store
from bookmarks_api.main import create_app
from bookmarks_api.models.bookmark import Bookmark  # noqa: F401
from bookmarks_api.schemas.bookmark import BookmarkRecord
from bookmarks_api.services.memory_store import InMemoryBookmarkStore
from bookmarks_api.services.store_base import BookmarkStore

TEST_API_TOKEN = "test-api-token"
AUTH_HEADERS = {"Authorization": f"Bearer {TEST_API_TOKEN}"}


def build_app(app_settings: Settings, store: BookmarkStore):
    """Create an app whose store dependency always returns `store`."""
    app = create_app(app_settings)
    app.dependency_overrides[get_bookmark_store] = lambda: store
    return app


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_bookmarks():
    return [
        BookmarkRecord(
            id="0b7e2a56-6a8c-4c55-9d62-0d5b1f1b7a01",
            title="Thinkful",
            url="https://www.thinkful.com",
            description="Think outside the classroom",
            rating=5,
        ),
        BookmarkRecord(
            id="1c8f3b67-7b9d-4d66-8e73-1e6c2a2c8b02",
            title="Google",
            url="https://www.google.com",
            description="Where we find everything else",
            rating=4,
        ),
        BookmarkRecord(
            id="2d904c78-8cae-4e77-9f84-2f7d3b3d9c03",
            title="MDN",
            url="https://developer.mozilla.org",
            description=None,
            rating=0,
        ),
    ]


@pytest.fixture
def xss_bookmark():
    """A stored bookmark carrying markup, and how it must look once served."""
    bad = BookmarkRecord(
        id="911e8a1b-0c2d-4e3f-8a4b-5c6d7e8f9a00",
        title='Naughty naughty very naughty <script>alert("xss");</script>',
        url="https://www.hackers.com",
        description=(
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        rating=1,
    )
    expected = bad.model_copy(
        update={
            "title": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
            "description": (
                'Bad image <img src="https://url.to.file.which/does-not.exist">. '
                "But not <strong>all</strong> bad."
            ),
        }
    )
    return bad, expected


@pytest.fixture
def memory_store(sample_bookmarks):
    return InMemoryBookmarkStore(sample_bookmarks)


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    return Settings(api_token=TEST_API_TOKEN, environment="test", log_level="WARNING")


@pytest_asyncio.fixture
async def test_client(test_settings, memory_store):
    """
    Authenticated HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/bookmarks")
            assert response.status_code == 200
    """
    app = build_app(test_settings, memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=AUTH_HEADERS
    ) as client:
        yield client


@pytest_asyncio.fixture
async def anonymous_client(test_settings, memory_store):
    """Same app as test_client, but requests carry no credentials."""
    app = build_app(test_settings, memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def client_factory():
    """
    Build authenticated clients for apps with non-default settings or stores.

    Usage:
        client = client_factory(prod_settings, failing_store)
        response = await client.get("/bookmarks")
    """
    clients = []

    def _make(app_settings: Settings, store: BookmarkStore, headers=AUTH_HEADERS, **transport_kwargs):
        transport = ASGITransport(app=build_app(app_settings, store), **transport_kwargs)
        client = AsyncClient(transport=transport, base_url="http://test", headers=headers)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def sql_session():
    """
    AsyncSession bound to a fresh in-memory SQLite database.

    StaticPool keeps a single connection, so the schema created here is the
    one every statement in the test sees.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()
