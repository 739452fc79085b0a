"""Project endpoints: projects, members and project chat."""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.teamhub.api.dependencies import CurrentUser, ProjectServiceDep, RequireCapability
from src.teamhub.models import User
from src.teamhub.schemas import (
    Envelope,
    MemberAdd,
    MemberRead,
    MessageCreate,
    MessageRead,
    PaginatedResponse,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    ok,
)

router = APIRouter(prefix="/projects", tags=["projects"])

ProjectViewer = Annotated[User, Depends(RequireCapability("can_view_project"))]
ProjectCreator = Annotated[User, Depends(RequireCapability("can_create_project"))]


@router.get(
    "",
    response_model=Envelope[PaginatedResponse[ProjectRead]],
    responses={
        200: {
            "description": "Paginated list of projects",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "items": [
                                {
                                    "id": "550e8400-e29b-41d4-a716-446655440000",
                                    "owner_id": "6fa459ea-ee8a-3ca4-894e-db77e160355e",
                                    "name": "서울 본사 정밀진단",
                                    "description": None,
                                    "color": "#3B82F6",
                                    "status": "active",
                                    "facility_type": "건축물",
                                    "facility_name": "본사 사옥",
                                    "address": "서울시 중구",
                                    "diagnosis_type": "정밀안전진단",
                                    "contact_person": None,
                                    "contact_phone": None,
                                    "contact_email": None,
                                    "special_notes": None,
                                    "start_date": "2024-03-01T00:00:00",
                                    "end_date": "2024-06-30T00:00:00",
                                    "created_at": "2024-02-20T14:45:00",
                                    "updated_at": "2024-02-20T14:45:00",
                                    "counts": {
                                        "members": 3,
                                        "tasks": 12,
                                        "schedules": 4,
                                        "milestones": 5,
                                        "files": 20,
                                    },
                                }
                            ],
                            "next_cursor": None,
                            "has_more": False,
                        },
                        "message": None,
                    }
                }
            },
        }
    },
)
async def list_projects(
    current_user: ProjectViewer,
    service: ProjectServiceDep,
    cursor: str | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    search: Annotated[str | None, Query(max_length=100)] = None,
    scope: Literal["all", "mine"] = "all",
) -> Envelope[PaginatedResponse[ProjectRead]]:
    """List projects newest first. ``scope=mine`` keeps projects the caller owns or belongs to."""
    page = await service.list_projects(
        current_user, cursor, limit, search=search, mine_only=scope == "mine"
    )
    return ok(page)


@router.post(
    "",
    response_model=Envelope[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Requires can_create_project"}},
)
async def create_project(
    data: ProjectCreate,
    current_user: ProjectCreator,
    service: ProjectServiceDep,
) -> Envelope[ProjectRead]:
    """Create a project. The creator becomes its owner and first member."""
    return ok(await service.create_project(data, current_user), "Project created")


@router.get(
    "/{project_id}",
    response_model=Envelope[ProjectRead],
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: UUID, _: ProjectViewer, service: ProjectServiceDep
) -> Envelope[ProjectRead]:
    return ok(await service.get_project(project_id))


@router.put(
    "/{project_id}",
    response_model=Envelope[ProjectRead],
    responses={
        403: {"description": "Only the owner, project admins and administrators can edit"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    current_user: CurrentUser,
    service: ProjectServiceDep,
) -> Envelope[ProjectRead]:
    return ok(await service.update_project(project_id, data, current_user), "Project updated")


@router.delete(
    "/{project_id}",
    response_model=Envelope[dict[str, int]],
    responses={
        403: {"description": "Only the owner and administrators can delete"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    current_user: CurrentUser,
    service: ProjectServiceDep,
) -> Envelope[dict[str, int]]:
    """Delete a project with its members, schedules, tasks, milestones, files and messages."""
    removed = await service.delete_project(project_id, current_user)
    return ok(removed, "Project deleted")


# --- Members ---


@router.get("/{project_id}/members", response_model=Envelope[list[MemberRead]])
async def list_members(
    project_id: UUID, _: ProjectViewer, service: ProjectServiceDep
) -> Envelope[list[MemberRead]]:
    return ok(await service.list_members(project_id))


@router.post(
    "/{project_id}/members",
    response_model=Envelope[MemberRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "Not allowed to manage members"},
        404: {"description": "Project or user not found"},
        409: {"description": "Already a member"},
    },
)
async def add_member(
    project_id: UUID,
    data: MemberAdd,
    current_user: CurrentUser,
    service: ProjectServiceDep,
) -> Envelope[MemberRead]:
    return ok(await service.add_member(project_id, data, current_user), "Member added")


@router.delete(
    "/{project_id}/members/{user_id}",
    response_model=Envelope[None],
    responses={
        400: {"description": "The owner cannot be removed"},
        403: {"description": "Not allowed to manage members"},
        404: {"description": "Project or member not found"},
    },
)
async def remove_member(
    project_id: UUID,
    user_id: UUID,
    current_user: CurrentUser,
    service: ProjectServiceDep,
) -> Envelope[None]:
    await service.remove_member(project_id, user_id, current_user)
    return ok(message="Member removed")


# --- Chat ---


@router.get(
    "/{project_id}/messages",
    response_model=Envelope[PaginatedResponse[MessageRead]],
    responses={403: {"description": "Only project members can read the chat"}},
)
async def list_messages(
    project_id: UUID,
    current_user: CurrentUser,
    service: ProjectServiceDep,
    cursor: str | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
) -> Envelope[PaginatedResponse[MessageRead]]:
    """Chat messages, newest first."""
    return ok(await service.list_messages(project_id, current_user, cursor, limit))


@router.post(
    "/{project_id}/messages",
    response_model=Envelope[MessageRead],
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Only project members can post"}},
)
async def post_message(
    project_id: UUID,
    data: MessageCreate,
    current_user: CurrentUser,
    service: ProjectServiceDep,
) -> Envelope[MessageRead]:
    message = await service.post_message(project_id, data, current_user)
    return ok(MessageRead.model_validate(message))
