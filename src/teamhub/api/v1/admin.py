"""User administration endpoints (super-admin only)."""

from fastapi import APIRouter

from src.teamhub.api.dependencies import AdminServiceDep, UserManager
from src.teamhub.schemas import (
    Envelope,
    LevelChangeRequest,
    ToggleActiveRequest,
    UserManagementLogRead,
    UserRead,
    ok,
)

router = APIRouter(prefix="/admin/users", tags=["admin"])


@router.get(
    "",
    response_model=Envelope[list[UserRead]],
    responses={403: {"description": "Requires can_manage_users"}},
)
async def list_users(_: UserManager, service: AdminServiceDep) -> Envelope[list[UserRead]]:
    """All users, most privileged first, then newest first."""
    users = await service.list_users()
    return ok([UserRead.from_user(u) for u in users])


@router.put(
    "/level",
    response_model=Envelope[UserRead],
    responses={
        200: {
            "description": "Level changed and logged",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "id": "550e8400-e29b-41d4-a716-446655440000",
                            "email": "kim@example.com",
                            "name": "김민수",
                            "phone": None,
                            "position": None,
                            "avatar_url": None,
                            "access_level": 1,
                            "level_label": "관리자",
                            "is_active": True,
                            "last_seen_at": None,
                            "created_at": "2024-01-15T10:30:00",
                        },
                        "message": "Access level changed",
                    }
                }
            },
        },
        400: {"description": "Target is a super-admin or already at this level"},
        403: {"description": "Not allowed to modify this user"},
        404: {"description": "User not found"},
    },
)
async def change_level(
    data: LevelChangeRequest,
    admin: UserManager,
    service: AdminServiceDep,
) -> Envelope[UserRead]:
    """Change a user's access level and record it in the management log."""
    user = await service.change_level(admin, data.user_id, data.new_level, data.reason)
    return ok(UserRead.from_user(user), "Access level changed")


@router.put(
    "/toggle",
    response_model=Envelope[UserRead],
    responses={
        400: {"description": "Cannot deactivate yourself"},
        403: {"description": "Not allowed to modify this user"},
        404: {"description": "User not found"},
    },
)
async def toggle_active(
    data: ToggleActiveRequest,
    admin: UserManager,
    service: AdminServiceDep,
) -> Envelope[UserRead]:
    """Activate or deactivate a user and record it in the management log."""
    user = await service.toggle_active(admin, data.user_id, data.reason)
    message = "User activated" if user.is_active else "User deactivated"
    return ok(UserRead.from_user(user), message)


@router.get("/logs", response_model=Envelope[list[UserManagementLogRead]])
async def list_logs(
    _: UserManager, service: AdminServiceDep
) -> Envelope[list[UserManagementLogRead]]:
    """The 100 most recent management log entries."""
    return ok(await service.recent_logs())
