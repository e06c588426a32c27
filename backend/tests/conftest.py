"""
Pytest Fixtures
Shared test fixtures
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cost_report.api.deps import get_report_cache
from cost_report.core.database import Base, get_db
from cost_report.main import app
from cost_report.schemas.provider import InputField, ProviderCreate
from cost_report.services.llm_service import get_llm_service
from cost_report.services.provider_store import ProviderStore
from cost_report.services.report.cache import InMemoryReportCache

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeLLM:
    """Stands in for LLMService; replays canned answers and records prompts"""

    def __init__(self, responses: list[str] | None = None, error: Exception | None = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt, user_prompt, temperature=None, max_tokens=None):
        self.calls.append((system_prompt, user_prompt))
        if self.error:
            raise self.error
        return self.responses.pop(0) if self.responses else ""


@pytest.fixture
async def db_engine():
    """Create async engine for testing"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Get database session"""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def store(db) -> ProviderStore:
    return ProviderStore(db)


@pytest.fixture
def report_cache() -> InMemoryReportCache:
    return InMemoryReportCache()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
async def client(db, report_cache, fake_llm) -> AsyncGenerator[AsyncClient, None]:
    """Get test client"""

    async def override_get_db():
        yield db

    async def override_get_llm_service():
        return fake_llm

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_report_cache] = lambda: report_cache
    app.dependency_overrides[get_llm_service] = override_get_llm_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def cloud_run_payload() -> dict:
    return {
        "name": "Google Cloud Run",
        "inputs": [
            {"name": "vCPU_hours", "label": "vCPU Hours", "type": "number", "defaultValue": "1"},
            {"name": "Storage_GB", "label": "Storage (GB)", "type": "number", "defaultValue": "10"},
            {"name": "Region", "type": "text", "defaultValue": "us-central1"},
        ],
    }


@pytest.fixture
async def cloud_run(store, cloud_run_payload):
    """A stored provider without any pricing memo"""
    return await store.create(ProviderCreate(**cloud_run_payload))


@pytest.fixture
async def atlas(store):
    return await store.create(
        ProviderCreate(
            name="MongoDB Atlas",
            inputs=[
                InputField(name="Cluster_tier", type="text", default_value="M10"),
                InputField(name="Storage_GB", type="number", default_value="20"),
            ],
        )
    )
