"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite database file, so tests never see each other's
rows. Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

from src.teamhub.core.config import get_settings
from src.teamhub.core.db import Database
from src.teamhub.core.documents import DocumentStore
from src.teamhub.main import create_app
from src.teamhub.models import User
from tests.helpers import auth_headers, create_user
from tests.utils import RecordingStorage


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database]:
    """Create a throwaway database with every table created."""
    test_database = Database(f"sqlite+aiosqlite:///{tmp_path / 'teamhub.db'}", poolclass=NullPool)
    await test_database.create_all()
    yield test_database
    await test_database.dispose()


@pytest.fixture
async def app(
    database: Database,
    storage: RecordingStorage,
    document_store: DocumentStore,
) -> AsyncGenerator[FastAPI]:
    """Application wired to the test database, recording storage and fakeredis.

    ASGITransport does not run the lifespan, so resources are injected here.
    """
    application = create_app(
        get_settings(),
        database=database,
        storage=storage,
        documents=document_store,
    )
    yield application
    await application.state.http_client.aclose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# --- Users at every access level ---


@pytest.fixture
async def super_admin(database: Database) -> User:
    return await create_user(database, access_level=0, name="최고관리자")


@pytest.fixture
async def admin_user(database: Database) -> User:
    return await create_user(database, access_level=1, name="관리자")


@pytest.fixture
async def member(database: Database) -> User:
    return await create_user(database, access_level=2, name="일반회원")


@pytest.fixture
async def other_member(database: Database) -> User:
    return await create_user(database, access_level=2, name="다른회원")


@pytest.fixture
def super_admin_headers(super_admin: User) -> dict[str, str]:
    return auth_headers(super_admin)


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def member_headers(member: User) -> dict[str, str]:
    return auth_headers(member)


@pytest.fixture
def other_member_headers(other_member: User) -> dict[str, str]:
    return auth_headers(other_member)
