"""User directory and presence."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from src.teamhub.api.dependencies import CurrentUser, RequireCapability, UserServiceDep
from src.teamhub.models import User
from src.teamhub.schemas import Envelope, PresenceList, UserSummary, ok

router = APIRouter(prefix="/users", tags=["users"])

UserViewer = Annotated[User, Depends(RequireCapability("can_view_users"))]


@router.get("", response_model=Envelope[list[UserSummary]])
async def list_users(_: UserViewer, service: UserServiceDep) -> Envelope[list[UserSummary]]:
    """Active users, by name. Used for assignee and member pickers."""
    users = await service.directory()
    return ok([UserSummary.model_validate(u) for u in users])


@router.get(
    "/online",
    response_model=Envelope[PresenceList],
    responses={
        200: {
            "description": "Presence of every active user",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "users": [
                                {
                                    "user": {
                                        "id": "550e8400-e29b-41d4-a716-446655440000",
                                        "name": "김민수",
                                        "email": "kim@example.com",
                                        "access_level": 2,
                                    },
                                    "status": "away",
                                    "last_seen_at": "2024-01-15T10:30:00",
                                    "last_seen_text": "12분 전",
                                }
                            ],
                            "online_count": 0,
                            "total_count": 1,
                        },
                        "message": None,
                    }
                }
            },
        }
    },
)
async def list_presence(_: CurrentUser, service: UserServiceDep) -> Envelope[PresenceList]:
    """Online within 5 minutes, away within 30, offline otherwise."""
    return ok(await service.presence())


@router.post("/online", response_model=Envelope[datetime])
async def heartbeat(current_user: CurrentUser, service: UserServiceDep) -> Envelope[datetime]:
    """Mark the caller as active now."""
    return ok(await service.heartbeat(current_user))
