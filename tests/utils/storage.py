"""In-memory object storage used in place of Google Drive.

Implements the ``ObjectStorage`` protocol, keeps uploaded bytes in a dict and
records every call so tests can assert what reached the provider.
"""

import secrets
from dataclasses import dataclass, field
from typing import Any

from src.teamhub.integrations.storage import RemoteObject, StorageError
from src.teamhub.models import FOLDER_MIME_TYPE


@dataclass
class StorageCall:
    method: str
    args: tuple[Any, ...]


@dataclass
class RecordingStorage:
    fail: bool = False
    calls: list[StorageCall] = field(default_factory=list)
    objects: dict[str, bytes] = field(default_factory=dict)
    closed: bool = False

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append(StorageCall(method, args))
        if self.fail:
            raise StorageError(f"{method} failed (simulated outage)")

    def methods(self) -> list[str]:
        return [call.method for call in self.calls]

    async def create_folder(self, name: str, parent_id: str | None) -> RemoteObject:
        self._record("create_folder", name, parent_id)
        return RemoteObject(id=f"drv{secrets.token_hex(8)}", name=name, mime_type=FOLDER_MIME_TYPE)

    async def upload(
        self,
        data: bytes,
        name: str,
        content_type: str,
        parent_id: str | None,
    ) -> RemoteObject:
        self._record("upload", name, content_type, parent_id)
        object_id = f"drv{secrets.token_hex(8)}"
        self.objects[object_id] = data
        return RemoteObject(id=object_id, name=name, mime_type=content_type, size=len(data))

    async def rename(self, object_id: str, name: str) -> None:
        self._record("rename", object_id, name)

    async def move(
        self,
        object_id: str,
        new_parent_id: str | None,
        old_parent_id: str | None,
    ) -> None:
        self._record("move", object_id, new_parent_id, old_parent_id)

    async def delete(self, object_id: str) -> None:
        self._record("delete", object_id)
        self.objects.pop(object_id, None)

    async def download(self, object_id: str) -> bytes:
        self._record("download", object_id)
        try:
            return self.objects[object_id]
        except KeyError as e:
            raise StorageError(f"Unknown object {object_id}") from e

    async def aclose(self) -> None:
        self.closed = True
