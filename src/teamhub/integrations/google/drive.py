"""Google Drive v3 implementation of ``ObjectStorage`` over httpx."""

import json
import secrets
from typing import Any

import httpx

from src.teamhub.core.config import Settings
from src.teamhub.core.logging import get_logger
from src.teamhub.integrations.google.oauth import GoogleAuthError, GoogleTokenProvider
from src.teamhub.integrations.storage import (
    ObjectStorage,
    RemoteObject,
    StorageError,
    UnconfiguredStorage,
)
from src.teamhub.models import FOLDER_MIME_TYPE

logger = get_logger(__name__)

DRIVE_API_BASE = "https://www.googleapis.com"
_FILE_FIELDS = "id,name,mimeType,size"


class GoogleDriveStorage:
    """Folder and file CRUD against one Drive, rooted at an optional folder."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_provider: GoogleTokenProvider,
        root_folder_id: str | None = None,
    ):
        self._client = client
        self._tokens = token_provider
        self._root_folder_id = root_folder_id

    def _parents(self, parent_id: str | None) -> list[str]:
        parent = parent_id or self._root_folder_id
        return [parent] if parent else []

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            token = await self._tokens.get_access_token()
            headers = {**kwargs.pop("headers", {}), "Authorization": f"Bearer {token}"}
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except GoogleAuthError as e:
            raise StorageError(str(e)) from e
        except httpx.HTTPError as e:
            raise StorageError(f"Drive request failed: {e}") from e

        if response.status_code == 401:
            self._tokens.invalidate()
        if response.is_error:
            raise StorageError(f"Drive {method} {url} returned {response.status_code}")
        return response

    @staticmethod
    def _to_remote(response: httpx.Response) -> RemoteObject:
        """File metadata from a Drive response; anything but a JSON object with an id is a StorageError."""
        try:
            payload = response.json()
            object_id = payload["id"]
            if not isinstance(object_id, str) or not object_id:
                raise ValueError(f"invalid file id {object_id!r}")
            return RemoteObject(
                id=object_id,
                name=payload.get("name", ""),
                mime_type=payload.get("mimeType", "application/octet-stream"),
                size=int(payload.get("size") or 0),
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Drive returned unusable file metadata: {e}") from e

    async def create_folder(self, name: str, parent_id: str | None) -> RemoteObject:
        response = await self._request(
            "POST",
            f"{DRIVE_API_BASE}/drive/v3/files",
            params={"fields": _FILE_FIELDS},
            json={"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": self._parents(parent_id)},
        )
        return self._to_remote(response)

    async def upload(
        self,
        data: bytes,
        name: str,
        content_type: str,
        parent_id: str | None,
    ) -> RemoteObject:
        boundary = f"teamhub-{secrets.token_hex(12)}"
        metadata = json.dumps({"name": name, "parents": self._parents(parent_id)})
        body = b"".join(
            [
                f"--{boundary}\r\n".encode(),
                b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
                metadata.encode(),
                f"\r\n--{boundary}\r\n".encode(),
                f"Content-Type: {content_type}\r\n\r\n".encode(),
                data,
                f"\r\n--{boundary}--\r\n".encode(),
            ]
        )
        response = await self._request(
            "POST",
            f"{DRIVE_API_BASE}/upload/drive/v3/files",
            params={"uploadType": "multipart", "fields": _FILE_FIELDS},
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
            content=body,
        )
        remote = self._to_remote(response)
        if not remote.size:
            remote = RemoteObject(remote.id, remote.name, remote.mime_type, len(data))
        return remote

    async def rename(self, object_id: str, name: str) -> None:
        await self._request(
            "PATCH",
            f"{DRIVE_API_BASE}/drive/v3/files/{object_id}",
            json={"name": name},
        )

    async def move(
        self,
        object_id: str,
        new_parent_id: str | None,
        old_parent_id: str | None,
    ) -> None:
        params = {
            "addParents": ",".join(self._parents(new_parent_id)),
            "removeParents": ",".join(self._parents(old_parent_id)),
        }
        await self._request(
            "PATCH",
            f"{DRIVE_API_BASE}/drive/v3/files/{object_id}",
            params={key: value for key, value in params.items() if value},
            json={},
        )

    async def delete(self, object_id: str) -> None:
        await self._request("DELETE", f"{DRIVE_API_BASE}/drive/v3/files/{object_id}")

    async def download(self, object_id: str) -> bytes:
        response = await self._request(
            "GET",
            f"{DRIVE_API_BASE}/drive/v3/files/{object_id}",
            params={"alt": "media"},
        )
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()


def build_storage(settings: Settings) -> ObjectStorage:
    """Drive storage when credentials are configured, otherwise a provider that always fails."""
    if not settings.google_drive_configured:
        logger.warning("Google Drive not configured - files will get local ids only")
        return UnconfiguredStorage()

    client = httpx.AsyncClient(timeout=settings.google_api_timeout_seconds)
    token_provider = GoogleTokenProvider(
        client,
        client_id=settings.google_client_id or "",
        client_secret=settings.google_client_secret or "",
        refresh_token=settings.google_refresh_token or "",
    )
    return GoogleDriveStorage(client, token_provider, settings.google_drive_root_folder_id)
