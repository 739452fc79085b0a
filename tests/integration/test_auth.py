"""Tests for authentication endpoints."""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from src.teamhub.api.dependencies import get_identity_verifier
from src.teamhub.core.db import Database
from src.teamhub.core.exceptions import AuthenticationError
from src.teamhub.integrations.google import GoogleIdentity
from src.teamhub.models import User
from tests.factories import DEFAULT_TEST_PASSWORD
from tests.helpers import create_user

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

REGISTRATION = {
    "email": "kim@example.com",
    "password": "Secure1!pass",
    "name": "김민수",
    "phone": "010-1234-5678",
    "position": "연구원",
}


async def login(client: AsyncClient, email: str, password: str = DEFAULT_TEST_PASSWORD):
    return await client.post("/api/auth/login", json={"email": email, "password": password})


class TestRegister:
    """Tests for POST /api/auth/register."""

    async def test_register_creates_member(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 201, f"Expected 201, got {response.status_code}: {response.json()}"
        data = response.json()["data"]
        assert data["user"]["access_level"] == 2
        assert data["user"]["level_label"] == "일반회원"
        assert data["password_strength"] == "strong"
        assert "hashed_password" not in data["user"]

    async def test_duplicate_email_rejected(self, client: AsyncClient) -> None:
        await client.post("/api/auth/register", json=REGISTRATION)

        response = await client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_weak_password_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register", json={**REGISTRATION, "password": "password"}
        )
        assert response.status_code == 400

    async def test_registered_user_can_log_in(self, client: AsyncClient) -> None:
        await client.post("/api/auth/register", json=REGISTRATION)

        response = await login(client, REGISTRATION["email"], REGISTRATION["password"])

        assert response.status_code == 200, response.json()
        assert response.json()["data"]["access_level"] == 2


class TestLogin:
    """Tests for POST /api/auth/login."""

    async def test_login_returns_token_pair(self, client: AsyncClient, member: User) -> None:
        response = await login(client, member.email)

        assert response.status_code == 200, response.json()
        data = response.json()["data"]
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["refresh_token"]

        profile = await client.get(
            "/api/user/profile", headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        assert profile.status_code == 200
        assert profile.json()["data"]["email"] == member.email
        assert profile.json()["data"]["last_seen_at"] is not None

    async def test_wrong_password(self, client: AsyncClient, member: User) -> None:
        response = await login(client, member.email, "Wrongpass1!")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_unknown_email_looks_like_wrong_password(self, client: AsyncClient) -> None:
        response = await login(client, "nobody@example.com")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_inactive_user_cannot_log_in(
        self, client: AsyncClient, database: Database
    ) -> None:
        user = await create_user(database, is_active=False)

        response = await login(client, user.email)

        assert response.status_code == 401

    async def test_google_only_account_has_no_password(
        self, client: AsyncClient, database: Database
    ) -> None:
        user = await create_user(database, hashed_password=None)

        response = await login(client, user.email)

        assert response.status_code == 401


class TestTokens:
    """Tests for refresh token rotation and logout."""

    async def test_refresh_rotates_token(self, client: AsyncClient, member: User) -> None:
        tokens = (await login(client, member.email)).json()["data"]

        refreshed = await client.post(
            "/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert refreshed.status_code == 200, refreshed.json()
        assert refreshed.json()["data"]["refresh_token"] != tokens["refresh_token"]

        # The old refresh token was revoked by the rotation
        replay = await client.post(
            "/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert replay.status_code == 401

    async def test_access_token_is_not_a_refresh_token(
        self, client: AsyncClient, member: User
    ) -> None:
        tokens = (await login(client, member.email)).json()["data"]

        response = await client.post(
            "/api/auth/refresh", json={"refresh_token": tokens["access_token"]}
        )

        assert response.status_code == 401

    async def test_refresh_token_is_not_an_access_token(
        self, client: AsyncClient, member: User
    ) -> None:
        tokens = (await login(client, member.email)).json()["data"]

        response = await client.get(
            "/api/user/profile", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
        )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_logout_revokes_refresh_token(self, client: AsyncClient, member: User) -> None:
        tokens = (await login(client, member.email)).json()["data"]

        logout = await client.post(
            "/api/auth/logout", json={"refresh_token": tokens["refresh_token"]}
        )
        assert logout.status_code == 200

        response = await client.post(
            "/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert response.status_code == 401

    async def test_logout_with_garbage_token_succeeds(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/logout", json={"refresh_token": "garbage"})
        assert response.status_code == 200


class TestForgotPassword:
    """Tests for POST /api/auth/forgot-password."""

    async def test_temporary_password_replaces_old_one(
        self, client: AsyncClient, member: User
    ) -> None:
        tokens = (await login(client, member.email)).json()["data"]

        response = await client.post(
            "/api/auth/forgot-password", json={"email": member.email}
        )

        assert response.status_code == 200, response.json()
        assert (await login(client, member.email)).status_code == 401
        # Sessions opened with the old password are revoked
        refresh = await client.post(
            "/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert refresh.status_code == 401

    async def test_unknown_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/forgot-password", json={"email": "nobody@example.com"}
        )
        assert response.status_code == 404

    async def test_super_admin_cannot_be_reset_anonymously(
        self, client: AsyncClient, super_admin: User
    ) -> None:
        """Knowing the super administrator's email must not lock them out."""
        tokens = (await login(client, super_admin.email)).json()["data"]

        response = await client.post(
            "/api/auth/forgot-password", json={"email": super_admin.email}
        )

        assert response.status_code == 403, response.json()
        assert response.json()["success"] is False
        assert (await login(client, super_admin.email)).status_code == 200
        refresh = await client.post(
            "/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert refresh.status_code == 200, refresh.json()

    async def test_admin_can_still_reset(self, client: AsyncClient, admin_user: User) -> None:
        response = await client.post(
            "/api/auth/forgot-password", json={"email": admin_user.email}
        )

        assert response.status_code == 200, response.json()
        assert (await login(client, admin_user.email)).status_code == 401


class TestGoogleLogin:
    """Tests for POST /api/auth/google."""

    @staticmethod
    def _verifier(identity: GoogleIdentity | None):
        async def verify(id_token: str) -> GoogleIdentity:
            if identity is None:
                raise AuthenticationError("Invalid Google ID token")
            return identity

        return lambda: verify

    async def test_first_login_creates_member(self, app: FastAPI, client: AsyncClient) -> None:
        app.dependency_overrides[get_identity_verifier] = self._verifier(
            GoogleIdentity(subject="123", email="lee@example.com", name="이영희")
        )

        response = await client.post("/api/auth/google", json={"id_token": "token"})

        assert response.status_code == 200, response.json()
        assert response.json()["data"]["access_level"] == 2
        profile = await client.get(
            "/api/user/profile",
            headers={"Authorization": f"Bearer {response.json()['data']['access_token']}"},
        )
        assert profile.json()["data"]["name"] == "이영희"

    async def test_existing_account_keeps_its_level(
        self, app: FastAPI, client: AsyncClient, admin_user: User
    ) -> None:
        app.dependency_overrides[get_identity_verifier] = self._verifier(
            GoogleIdentity(subject="456", email=admin_user.email, name="whoever")
        )

        response = await client.post("/api/auth/google", json={"id_token": "token"})

        assert response.status_code == 200, response.json()
        assert response.json()["data"]["access_level"] == 1

    async def test_invalid_token(self, app: FastAPI, client: AsyncClient) -> None:
        app.dependency_overrides[get_identity_verifier] = self._verifier(None)

        response = await client.post("/api/auth/google", json={"id_token": "bad"})

        assert response.status_code == 401

    async def test_not_configured(self, client: AsyncClient) -> None:
        """Without GOOGLE_CLIENT_ID the endpoint is unavailable rather than failing open."""
        response = await client.post("/api/auth/google", json={"id_token": "token"})
        assert response.status_code == 503
