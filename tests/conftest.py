"""
Shared test fixtures — async DB, document stores, FastAPI test client.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from bizdesk.database import Base
from bizdesk.main import app
from bizdesk.models import DocumentRecord  # noqa: F401
from bizdesk.services.sql_store import SqlDocumentStore
from bizdesk.services.store import MemoryDocumentStore, get_store


# ── Test Database (SQLite in-memory) ────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture()
async def sql_store(db_engine):
    return SqlDocumentStore(async_sessionmaker(db_engine, expire_on_commit=False))


@pytest.fixture()
def memory_store():
    return MemoryDocumentStore()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, memory_store, db_engine):
    """Each store-level test runs against both local backends."""
    if request.param == "memory":
        return memory_store
    return SqlDocumentStore(async_sessionmaker(db_engine, expire_on_commit=False))


def _client_for(store):
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture()
async def client(sql_store):
    """FastAPI test client with the SQL store on the test DB injected."""
    async with _client_for(sql_store) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def client_factory():
    """Build a client around an arbitrary store (e.g. one that fails on purpose)."""
    yield _client_for
    app.dependency_overrides.clear()


# ── Sample Data ─────────────────────────────────────────

SAMPLE_INVOICE = {
    "clientName": "Sunrise Bakery",
    "companyName": "Sunrise Foods Ltd",
    "issueDate": "2026-10-01",
    "dueDate": "2026-10-31",
    "amount": 1250.0,
    "status": "Draft",
    "items": [
        {"id": "1", "description": "Catering", "quantity": 1, "unitPrice": 1250.0, "total": 1250.0},
    ],
}


@pytest.fixture
def sample_invoice():
    return dict(SAMPLE_INVOICE)
