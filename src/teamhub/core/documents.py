"""JSON document store on Redis.

Each collection is a Redis hash of ``id -> JSON document``. Equality lookups on
declared fields go through a set per ``(field, value)``. Everything beyond a
single equality match is filtered in memory by the caller.
"""

import json
from collections.abc import Iterable
from typing import Any

from redis.asyncio import Redis

from src.teamhub.core.logging import get_logger

logger = get_logger(__name__)

Document = dict[str, Any]


class DocumentCollection:
    def __init__(
        self,
        redis: Redis,
        prefix: str,
        name: str,
        indexed_fields: Iterable[str] = (),
    ):
        self.redis = redis
        self.name = name
        self.indexed_fields = tuple(indexed_fields)
        self._key = f"{prefix}:{name}"

    def _index_key(self, field: str, value: Any) -> str:
        return f"{self._key}:idx:{field}:{value}"

    async def get(self, doc_id: str) -> Document | None:
        raw = await self.redis.hget(self._key, doc_id)  # type: ignore[misc]
        return json.loads(raw) if raw is not None else None

    async def put(self, doc_id: str, document: Document) -> Document:
        """Insert or replace a document, keeping the field indexes in step."""
        previous = await self.get(doc_id)
        stored = {**document, "id": doc_id}

        async with self.redis.pipeline(transaction=True) as pipe:
            for field in self.indexed_fields:
                if previous is not None and previous.get(field) != stored.get(field):
                    pipe.srem(self._index_key(field, previous.get(field)), doc_id)
                pipe.sadd(self._index_key(field, stored.get(field)), doc_id)
            pipe.hset(self._key, doc_id, json.dumps(stored, default=str))
            await pipe.execute()
        return stored

    async def delete(self, doc_id: str) -> bool:
        previous = await self.get(doc_id)
        if previous is None:
            return False

        async with self.redis.pipeline(transaction=True) as pipe:
            for field in self.indexed_fields:
                pipe.srem(self._index_key(field, previous.get(field)), doc_id)
            pipe.hdel(self._key, doc_id)
            await pipe.execute()
        return True

    async def where(self, field: str, value: Any) -> list[Document]:
        """All documents whose ``field`` equals ``value``."""
        if field not in self.indexed_fields:
            return [doc for doc in await self.all() if doc.get(field) == value]

        ids = await self.redis.smembers(self._index_key(field, value))  # type: ignore[misc]
        if not ids:
            return []
        raws = await self.redis.hmget(self._key, sorted(ids))  # type: ignore[misc]
        return [json.loads(raw) for raw in raws if raw is not None]

    async def all(self) -> list[Document]:
        raws = await self.redis.hgetall(self._key)  # type: ignore[misc]
        return [json.loads(raw) for raw in raws.values()]


class DocumentStore:
    """Entry point handed to services; one instance per application."""

    def __init__(self, redis: Redis, prefix: str = "teamhub"):
        self.redis = redis
        self.prefix = prefix

    def collection(self, name: str, indexed_fields: Iterable[str] = ()) -> DocumentCollection:
        return DocumentCollection(self.redis, self.prefix, name, indexed_fields)

    async def ping(self) -> None:
        await self.redis.ping()  # type: ignore[misc]
