"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database and HTTP client fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production-use-0123456789")
# Cheap hashing keeps the suite fast; production uses the defaults in Settings
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.teamhub.core.config import get_settings
from src.teamhub.core.documents import DocumentStore
from tests.utils import RecordingStorage

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def document_store(fake_redis: Redis) -> DocumentStore:
    """Document store over fakeredis with a test-only key prefix."""
    return DocumentStore(fake_redis, prefix="teamhub-test")


# --- Storage Provider Fixtures (shared) ---


@pytest.fixture
def storage() -> RecordingStorage:
    """In-memory storage provider that records every call.

    Set ``storage.fail = True`` to make every call raise ``StorageError``.
    """
    return RecordingStorage()
