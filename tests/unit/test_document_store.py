"""Tests for the Redis-backed JSON document store."""

import pytest

from src.teamhub.core.documents import DocumentStore

pytestmark = pytest.mark.unit


@pytest.fixture
def schedules(document_store: DocumentStore):
    return document_store.collection("user_schedules", indexed_fields=("date",))


class TestDocumentCollection:
    async def test_put_then_get(self, schedules):
        stored = await schedules.put("s1", {"title": "현장 점검", "date": "2024-03-01"})
        assert stored["id"] == "s1"
        assert await schedules.get("s1") == stored

    async def test_get_missing_returns_none(self, schedules):
        assert await schedules.get("missing") is None

    async def test_where_uses_index(self, schedules):
        await schedules.put("s1", {"title": "a", "date": "2024-03-01"})
        await schedules.put("s2", {"title": "b", "date": "2024-03-01"})
        await schedules.put("s3", {"title": "c", "date": "2024-03-02"})

        titles = sorted(doc["title"] for doc in await schedules.where("date", "2024-03-01"))
        assert titles == ["a", "b"]

    async def test_reindex_on_field_change(self, schedules):
        await schedules.put("s1", {"title": "a", "date": "2024-03-01"})
        await schedules.put("s1", {"title": "a", "date": "2024-03-05"})

        assert await schedules.where("date", "2024-03-01") == []
        assert [d["id"] for d in await schedules.where("date", "2024-03-05")] == ["s1"]

    async def test_where_on_unindexed_field_scans(self, schedules):
        await schedules.put("s1", {"title": "a", "date": "2024-03-01", "user_id": "u1"})
        await schedules.put("s2", {"title": "b", "date": "2024-03-01", "user_id": "u2"})

        assert [d["id"] for d in await schedules.where("user_id", "u2")] == ["s2"]

    async def test_delete_removes_document_and_index(self, schedules):
        await schedules.put("s1", {"title": "a", "date": "2024-03-01"})

        assert await schedules.delete("s1") is True
        assert await schedules.get("s1") is None
        assert await schedules.where("date", "2024-03-01") == []

    async def test_delete_missing_returns_false(self, schedules):
        assert await schedules.delete("missing") is False

    async def test_collections_are_isolated(self, document_store: DocumentStore, schedules):
        other = document_store.collection("other")
        await schedules.put("s1", {"title": "a", "date": "2024-03-01"})
        assert await other.all() == []


async def test_ping(document_store: DocumentStore):
    await document_store.ping()
