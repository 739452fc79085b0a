"""Tests for user administration endpoints (super-admin only)."""

import pytest
from httpx import AsyncClient

from src.teamhub.core.db import Database
from src.teamhub.models import User
from tests.helpers import auth_headers, create_user

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestListUsers:
    """Tests for GET /api/admin/users."""

    async def test_super_admin_lists_users_most_privileged_first(
        self,
        client: AsyncClient,
        super_admin_headers: dict,
        super_admin: User,
        admin_user: User,
        member: User,
    ) -> None:
        response = await client.get("/api/admin/users", headers=super_admin_headers)

        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.json()}"
        levels = [u["access_level"] for u in response.json()["data"]]
        assert levels == sorted(levels)
        assert len(levels) == 3

    async def test_admin_is_forbidden(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.get("/api/admin/users", headers=admin_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Missing permission: can_manage_users"

    async def test_member_is_forbidden(self, client: AsyncClient, member_headers: dict) -> None:
        response = await client.get("/api/admin/users", headers=member_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Missing permission: can_manage_users"


class TestChangeLevel:
    """Tests for PUT /api/admin/users/level."""

    async def test_promote_member_and_log_it(
        self,
        client: AsyncClient,
        super_admin_headers: dict,
        super_admin: User,
        member: User,
    ) -> None:
        response = await client.put(
            "/api/admin/users/level",
            json={"user_id": str(member.id), "new_level": 1, "reason": "팀장 승진"},
            headers=super_admin_headers,
        )

        assert response.status_code == 200, response.json()
        assert response.json()["data"]["access_level"] == 1
        assert response.json()["data"]["level_label"] == "관리자"

        logs = await client.get("/api/admin/users/logs", headers=super_admin_headers)
        entry = logs.json()["data"][0]
        assert entry["action"] == "level_change"
        assert entry["old_level"] == 2
        assert entry["new_level"] == 1
        assert entry["reason"] == "팀장 승진"
        assert entry["admin_name"] == super_admin.name
        assert entry["target_user_name"] == member.name

    async def test_new_level_applies_to_existing_tokens(
        self,
        client: AsyncClient,
        super_admin_headers: dict,
        member: User,
        member_headers: dict,
    ) -> None:
        """The stored level is authoritative, not the level claim in the token."""
        before = await client.post("/api/projects", json={"name": "x"}, headers=member_headers)
        assert before.status_code == 403

        await client.put(
            "/api/admin/users/level",
            json={"user_id": str(member.id), "new_level": 1},
            headers=super_admin_headers,
        )
        after = await client.post("/api/projects", json={"name": "x"}, headers=member_headers)

        assert after.status_code == 201, after.json()

    async def test_super_admin_record_is_immutable(
        self, client: AsyncClient, database: Database, super_admin_headers: dict
    ) -> None:
        other_super = await create_user(database, access_level=0, name="다른최고관리자")

        response = await client.put(
            "/api/admin/users/level",
            json={"user_id": str(other_super.id), "new_level": 2},
            headers=super_admin_headers,
        )

        assert response.status_code in (400, 403), response.json()
        logs = await client.get("/api/admin/users/logs", headers=super_admin_headers)
        assert logs.json()["data"] == []

    async def test_same_level_rejected(
        self, client: AsyncClient, super_admin_headers: dict, member: User
    ) -> None:
        response = await client.put(
            "/api/admin/users/level",
            json={"user_id": str(member.id), "new_level": 2},
            headers=super_admin_headers,
        )
        assert response.status_code == 400

    async def test_unknown_level_rejected(
        self, client: AsyncClient, super_admin_headers: dict, member: User
    ) -> None:
        response = await client.put(
            "/api/admin/users/level",
            json={"user_id": str(member.id), "new_level": 5},
            headers=super_admin_headers,
        )
        assert response.status_code == 400

    async def test_unknown_user(self, client: AsyncClient, super_admin_headers: dict) -> None:
        response = await client.put(
            "/api/admin/users/level",
            json={"user_id": "00000000-0000-0000-0000-000000000000", "new_level": 1},
            headers=super_admin_headers,
        )
        assert response.status_code == 404


class TestToggleActive:
    """Tests for PUT /api/admin/users/toggle."""

    async def test_deactivate_locks_user_out(
        self,
        client: AsyncClient,
        super_admin_headers: dict,
        member: User,
        member_headers: dict,
    ) -> None:
        response = await client.put(
            "/api/admin/users/toggle",
            json={"user_id": str(member.id), "reason": "퇴사"},
            headers=super_admin_headers,
        )

        assert response.status_code == 200, response.json()
        assert response.json()["data"]["is_active"] is False
        assert response.json()["message"] == "User deactivated"

        locked_out = await client.get("/api/user/profile", headers=member_headers)
        assert locked_out.status_code == 401

        logs = await client.get("/api/admin/users/logs", headers=super_admin_headers)
        assert logs.json()["data"][0]["action"] == "deactivate"

    async def test_toggle_twice_reactivates(
        self, client: AsyncClient, super_admin_headers: dict, member: User
    ) -> None:
        payload = {"user_id": str(member.id)}
        await client.put("/api/admin/users/toggle", json=payload, headers=super_admin_headers)

        response = await client.put(
            "/api/admin/users/toggle", json=payload, headers=super_admin_headers
        )

        assert response.json()["data"]["is_active"] is True
        logs = await client.get("/api/admin/users/logs", headers=super_admin_headers)
        assert [e["action"] for e in logs.json()["data"]] == ["activate", "deactivate"]

    async def test_cannot_deactivate_self(
        self, client: AsyncClient, super_admin: User, super_admin_headers: dict
    ) -> None:
        response = await client.put(
            "/api/admin/users/toggle",
            json={"user_id": str(super_admin.id)},
            headers=super_admin_headers,
        )
        assert response.status_code == 400


class TestProfileAndPermissions:
    """Tests for /api/user."""

    async def test_permissions_reflect_level(
        self, client: AsyncClient, member: User, admin_user: User
    ) -> None:
        member_perms = await client.get("/api/user/permissions", headers=auth_headers(member))
        admin_perms = await client.get("/api/user/permissions", headers=auth_headers(admin_user))

        assert member_perms.json()["data"]["capabilities"]["can_create_project"] is False
        assert admin_perms.json()["data"]["capabilities"]["can_create_project"] is True
        assert admin_perms.json()["data"]["level_label"] == "관리자"

    async def test_update_profile(self, client: AsyncClient, member_headers: dict) -> None:
        response = await client.put(
            "/api/user/profile",
            json={"phone": "010-9876-5432", "position": "책임연구원"},
            headers=member_headers,
        )

        assert response.status_code == 200, response.json()
        assert response.json()["data"]["phone"] == "010-9876-5432"

    async def test_change_password_requires_current(
        self, client: AsyncClient, member_headers: dict
    ) -> None:
        response = await client.put(
            "/api/user/change-password",
            json={"current_password": "Wrongpass1!", "new_password": "Newpass12!"},
            headers=member_headers,
        )
        assert response.status_code == 400
