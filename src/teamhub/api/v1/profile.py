"""Own-account endpoints: profile, password and permissions."""

from fastapi import APIRouter

from src.teamhub.api.dependencies import CurrentUser, UserServiceDep
from src.teamhub.schemas import (
    Envelope,
    PasswordChangeRequest,
    PermissionsRead,
    ProfileUpdate,
    UserRead,
    ok,
)

router = APIRouter(prefix="/user", tags=["users"])


@router.get(
    "/profile",
    response_model=Envelope[UserRead],
    responses={
        200: {
            "description": "Current user profile",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "id": "550e8400-e29b-41d4-a716-446655440000",
                            "email": "kim@example.com",
                            "name": "김민수",
                            "phone": "010-1234-5678",
                            "position": "연구원",
                            "avatar_url": None,
                            "access_level": 2,
                            "level_label": "일반회원",
                            "is_active": True,
                            "last_seen_at": "2024-01-15T10:30:00",
                            "created_at": "2024-01-15T10:30:00",
                        },
                        "message": None,
                    }
                }
            },
        },
        401: {"description": "Not authenticated"},
    },
)
async def get_profile(current_user: CurrentUser) -> Envelope[UserRead]:
    return ok(UserRead.from_user(current_user))


@router.put(
    "/profile",
    response_model=Envelope[UserRead],
    responses={
        400: {"description": "Invalid name, phone or position"},
        401: {"description": "Not authenticated"},
    },
)
async def update_profile(
    data: ProfileUpdate,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> Envelope[UserRead]:
    """Update name, phone and position. Omitted fields are left unchanged."""
    user = await service.update_profile(current_user, data)
    return ok(UserRead.from_user(user), "Profile updated")


@router.put(
    "/change-password",
    response_model=Envelope[None],
    responses={
        400: {"description": "Current password wrong or new password too weak"},
        401: {"description": "Not authenticated"},
    },
)
async def change_password(
    data: PasswordChangeRequest,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> Envelope[None]:
    """Change the password. Other sessions are signed out."""
    await service.change_password(current_user, data.current_password, data.new_password)
    return ok(message="Password changed")


@router.get("/permissions", response_model=Envelope[PermissionsRead])
async def get_permissions(
    current_user: CurrentUser, service: UserServiceDep
) -> Envelope[PermissionsRead]:
    """Capability flags granted by the caller's access level."""
    return ok(service.permissions(current_user))
