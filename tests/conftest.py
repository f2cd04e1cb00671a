"""
Pytest configuration and fixtures for CareRelay API tests
"""
import os

# Settings are read at import time, so the environment must be set first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ["ENVIRONMENT"] = "testing"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENABLE_OTEL_EXPORTER"] = "false"
os.environ["ENABLE_JSON_LOGGING"] = "false"

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import get_db, Base
from app.core.config import settings

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "TestPassword123!"


@pytest.fixture(scope="function")
async def test_engine():
    """Fresh in-memory database for each test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False
    )


@pytest.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for tests that talk to the CRUD layer directly"""
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def storage_dir(tmp_path, monkeypatch):
    """Keep uploaded blobs inside the test's temp directory"""
    path = tmp_path / "storage"
    monkeypatch.setattr(settings, "STORAGE_DIR", str(path))
    monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "http://test")
    return path


@pytest.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override"""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def test_user_data():
    """Test user data fixture"""
    return {
        "email": "test@example.com",
        "password": TEST_PASSWORD,
        "password_confirm": TEST_PASSWORD
    }


@pytest.fixture
async def authenticated_user(client: AsyncClient, test_user_data):
    """Create and authenticate a test user"""
    response = await client.post("/api/v1/auth/register", json=test_user_data)
    assert response.status_code == 201

    tokens = response.json()
    return {
        "access_token": tokens["access_token"],
        "headers": {"Authorization": f"Bearer {tokens['access_token']}"},
        "user_data": test_user_data
    }


@pytest.fixture
def make_profile(client: AsyncClient):
    """
    Register a user and give them a profile.
    Returns the auth headers for that user.
    """

    async def _make(email: str, role: str, name: str, **fields) -> dict:
        response = await client.post("/api/v1/auth/register", json={
            "email": email,
            "password": TEST_PASSWORD,
            "password_confirm": TEST_PASSWORD
        })
        assert response.status_code == 201
        headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

        if role == "patient":
            fields.setdefault("bed_number", "12")
        response = await client.post(
            "/api/v1/profiles",
            json={"role": role, "name": name, **fields},
            headers=headers
        )
        assert response.status_code == 200
        return headers

    return _make


@pytest.fixture
async def nurse_headers(make_profile):
    return await make_profile("nurse@example.com", "nurse", "Nina Nurse", staff_id="N-1", department="Ward 3")


@pytest.fixture
async def porter_headers(make_profile):
    return await make_profile("porter@example.com", "porter", "Bob", staff_id="P-7")


@pytest.fixture
async def supervisor_headers(make_profile):
    return await make_profile("supervisor@example.com", "supervisor", "Sam Supervisor")


@pytest.fixture
async def patient_headers(make_profile):
    return await make_profile("patient@example.com", "patient", "Pat Patient", bed_number="12", case_number="C-100")


@pytest.fixture
def task_payload():
    return {
        "type": "transport",
        "priority": "high",
        "bed_number": "12",
        "patient_name": "Pat Patient",
        "description": "Wheelchair to radiology",
        "location": "Ward 3",
        "case_number": "C-100"
    }


@pytest.fixture
def create_task(client: AsyncClient, task_payload):
    """Raise a task as the given user; extra kwargs override the payload"""

    async def _create(headers: dict, **overrides) -> dict:
        response = await client.post("/api/v1/tasks", json={**task_payload, **overrides}, headers=headers)
        assert response.status_code == 201
        return response.json()

    return _create
