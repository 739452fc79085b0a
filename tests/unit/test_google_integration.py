"""Tests for the Google Drive storage provider and ID-token verification.

Google is replaced by an ``httpx.MockTransport`` so the exact requests the
provider sends can be inspected.
"""

import json

import httpx
import pytest

from src.teamhub.core.config import Settings
from src.teamhub.integrations.google import (
    GoogleAuthError,
    GoogleDriveStorage,
    GoogleTokenProvider,
    build_storage,
    verify_id_token,
)
from src.teamhub.integrations.google.oauth import TOKEN_URL, TOKENINFO_URL
from src.teamhub.integrations.storage import StorageError, UnconfiguredStorage
from src.teamhub.models import FOLDER_MIME_TYPE

pytestmark = pytest.mark.unit


def _endpoint(request: httpx.Request) -> str:
    """Request URL without its query string."""
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


class FakeGoogle:
    """Routes requests to canned Google responses and keeps a request log."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.drive_status = 200
        self.token_calls = 0
        self.drive_override: httpx.Response | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = _endpoint(request)
        if url == TOKEN_URL:
            self.token_calls += 1
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "ya29.test", "expires_in": 3600})
        if self.drive_override is not None:
            return self.drive_override
        if self.drive_status != 200:
            return httpx.Response(self.drive_status, json={"error": {"code": self.drive_status}})
        if request.method == "GET" and request.url.params.get("alt") == "media":
            return httpx.Response(200, content=b"file-bytes")
        if request.method == "POST" and "upload" in request.url.path:
            return httpx.Response(
                200, json={"id": "up1", "name": "report.pdf", "mimeType": "application/pdf"}
            )
        if request.method == "POST":
            body = json.loads(request.content)
            return httpx.Response(
                200, json={"id": "fold1", "name": body["name"], "mimeType": body["mimeType"]}
            )
        return httpx.Response(200, json={})

    def drive_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if _endpoint(r) != TOKEN_URL]


@pytest.fixture
def google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
async def drive(google: FakeGoogle):
    client = httpx.AsyncClient(transport=httpx.MockTransport(google))
    tokens = GoogleTokenProvider(client, "client-id", "client-secret", "refresh-token")
    storage = GoogleDriveStorage(client, tokens, root_folder_id="root123")
    yield storage
    await storage.aclose()


class TestGoogleDriveStorage:
    async def test_create_folder_under_root_folder(self, drive, google):
        remote = await drive.create_folder("현장사진", None)

        assert remote.id == "fold1"
        assert remote.mime_type == FOLDER_MIME_TYPE
        request = google.drive_requests()[0]
        assert request.headers["Authorization"] == "Bearer ya29.test"
        assert json.loads(request.content)["parents"] == ["root123"]

    async def test_upload_is_multipart_and_sizes_from_payload(self, drive, google):
        remote = await drive.upload(b"%PDF-1.4", "report.pdf", "application/pdf", "fold1")

        assert remote.id == "up1"
        assert remote.size == len(b"%PDF-1.4")
        request = google.drive_requests()[0]
        assert request.url.params["uploadType"] == "multipart"
        assert request.headers["Content-Type"].startswith("multipart/related; boundary=")
        assert b"%PDF-1.4" in request.content
        assert b'"parents": ["fold1"]' in request.content

    async def test_move_swaps_parents(self, drive, google):
        await drive.move("file1", "new-parent", None)

        params = google.drive_requests()[0].url.params
        assert params["addParents"] == "new-parent"
        # Nodes at the root live under the configured root folder
        assert params["removeParents"] == "root123"

    async def test_download_returns_bytes(self, drive):
        assert await drive.download("file1") == b"file-bytes"

    async def test_access_token_is_cached(self, drive, google):
        await drive.rename("file1", "a")
        await drive.rename("file1", "b")
        assert google.token_calls == 1

    async def test_drive_error_raises_storage_error(self, drive, google):
        google.drive_status = 500
        with pytest.raises(StorageError):
            await drive.delete("file1")

    async def test_unauthorized_invalidates_cached_token(self, drive, google):
        await drive.rename("file1", "a")
        google.drive_status = 401
        with pytest.raises(StorageError):
            await drive.rename("file1", "b")
        google.drive_status = 200
        await drive.rename("file1", "c")
        assert google.token_calls == 2

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>proxy login</html>"),
            httpx.Response(200, json={"name": "현장사진"}),
            httpx.Response(200, json=["fold1"]),
            httpx.Response(200, json={"id": ""}),
        ],
        ids=["html", "missing-id", "not-an-object", "blank-id"],
    )
    async def test_unusable_success_body_raises_storage_error(self, drive, google, response):
        google.drive_override = response
        with pytest.raises(StorageError):
            await drive.create_folder("현장사진", None)

    async def test_upload_without_id_raises_storage_error(self, drive, google):
        google.drive_override = httpx.Response(200, json={"kind": "drive#file"})
        with pytest.raises(StorageError):
            await drive.upload(b"data", "a.txt", "text/plain", None)

    async def test_token_endpoint_html_raises_storage_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>captive portal</html>")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        tokens = GoogleTokenProvider(client, "client-id", "client-secret", "refresh-token")
        storage = GoogleDriveStorage(client, tokens)
        with pytest.raises(StorageError):
            await storage.rename("file1", "a")
        await storage.aclose()

    async def test_token_refresh_failure_raises_storage_error(self, drive, google):
        google.token_status = 400
        with pytest.raises(StorageError):
            await drive.create_folder("x", None)


class TestBuildStorage:
    def test_unconfigured_without_credentials(self):
        settings = Settings(google_client_id=None, google_refresh_token=None)
        assert isinstance(build_storage(settings), UnconfiguredStorage)

    async def test_unconfigured_storage_always_fails(self):
        with pytest.raises(StorageError):
            await UnconfiguredStorage().create_folder("x", None)


class TestVerifyIdToken:
    @staticmethod
    def _client(claims: dict, status_code: int = 200) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            assert _endpoint(request) == TOKENINFO_URL
            return httpx.Response(status_code, json=claims)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    @staticmethod
    def _claims(**overrides) -> dict:
        return {
            "aud": "client-id",
            "iss": "https://accounts.google.com",
            "sub": "1234567890",
            "email": "Kim@Example.com",
            "email_verified": "true",
            "name": "김민수",
            **overrides,
        }

    async def test_valid_token(self):
        async with self._client(self._claims()) as client:
            identity = await verify_id_token(client, "token", "client-id")
        assert identity.subject == "1234567890"
        assert identity.email == "kim@example.com"
        assert identity.name == "김민수"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"aud": "someone-else"},
            {"iss": "https://evil.example.com"},
            {"email_verified": "false"},
            {"email": ""},
        ],
    )
    async def test_rejected_claims(self, overrides):
        async with self._client(self._claims(**overrides)) as client:
            with pytest.raises(GoogleAuthError):
                await verify_id_token(client, "token", "client-id")

    async def test_tokeninfo_non_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(GoogleAuthError):
                await verify_id_token(client, "token", "client-id")

    async def test_tokeninfo_rejection(self):
        async with self._client({"error": "invalid_token"}, status_code=400) as client:
            with pytest.raises(GoogleAuthError):
                await verify_id_token(client, "token", "client-id")
