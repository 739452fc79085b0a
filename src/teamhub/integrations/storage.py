"""Object-storage provider interface used by the file manager."""

from dataclasses import dataclass
from typing import Protocol


class StorageError(Exception):
    """The storage provider could not complete a request."""


class StorageNotConfiguredError(StorageError):
    """No provider credentials are configured."""


@dataclass(frozen=True)
class RemoteObject:
    id: str
    name: str
    mime_type: str
    size: int = 0


class ObjectStorage(Protocol):
    async def create_folder(self, name: str, parent_id: str | None) -> RemoteObject: ...

    async def upload(
        self,
        data: bytes,
        name: str,
        content_type: str,
        parent_id: str | None,
    ) -> RemoteObject: ...

    async def rename(self, object_id: str, name: str) -> None: ...

    async def move(
        self,
        object_id: str,
        new_parent_id: str | None,
        old_parent_id: str | None,
    ) -> None: ...

    async def delete(self, object_id: str) -> None: ...

    async def download(self, object_id: str) -> bytes: ...

    async def aclose(self) -> None: ...


class UnconfiguredStorage:
    """Stand-in provider used when no credentials are configured; every call fails."""

    async def create_folder(self, name: str, parent_id: str | None) -> RemoteObject:
        raise StorageNotConfiguredError("Object storage is not configured")

    async def upload(
        self,
        data: bytes,
        name: str,
        content_type: str,
        parent_id: str | None,
    ) -> RemoteObject:
        raise StorageNotConfiguredError("Object storage is not configured")

    async def rename(self, object_id: str, name: str) -> None:
        raise StorageNotConfiguredError("Object storage is not configured")

    async def move(
        self,
        object_id: str,
        new_parent_id: str | None,
        old_parent_id: str | None,
    ) -> None:
        raise StorageNotConfiguredError("Object storage is not configured")

    async def delete(self, object_id: str) -> None:
        raise StorageNotConfiguredError("Object storage is not configured")

    async def download(self, object_id: str) -> bytes:
        raise StorageNotConfiguredError("Object storage is not configured")

    async def aclose(self) -> None:
        return None
