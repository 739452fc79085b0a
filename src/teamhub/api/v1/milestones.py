"""Milestone endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.teamhub.api.dependencies import CurrentUser, MilestoneServiceDep, RequireCapability
from src.teamhub.models import User
from src.teamhub.schemas import Envelope, MilestoneCreate, MilestoneRead, MilestoneUpdate, ok

router = APIRouter(prefix="/milestones", tags=["milestones"])

ProjectViewer = Annotated[User, Depends(RequireCapability("can_view_project"))]


@router.get("", response_model=Envelope[list[MilestoneRead]])
async def list_milestones(
    project_id: UUID, _: ProjectViewer, service: MilestoneServiceDep
) -> Envelope[list[MilestoneRead]]:
    """Milestones of a project by order, then start date."""
    milestones = await service.list_milestones(project_id)
    return ok([MilestoneRead.model_validate(m) for m in milestones])


@router.post(
    "",
    response_model=Envelope[MilestoneRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "start_date must be before end_date"},
        403: {"description": "Not a contributor of the project"},
    },
)
async def create_milestone(
    data: MilestoneCreate, current_user: CurrentUser, service: MilestoneServiceDep
) -> Envelope[MilestoneRead]:
    milestone = await service.create_milestone(data, current_user)
    return ok(MilestoneRead.model_validate(milestone), "Milestone created")


@router.put("/{milestone_id}", response_model=Envelope[MilestoneRead])
async def update_milestone(
    milestone_id: UUID,
    data: MilestoneUpdate,
    current_user: CurrentUser,
    service: MilestoneServiceDep,
) -> Envelope[MilestoneRead]:
    milestone = await service.update_milestone(milestone_id, data, current_user)
    return ok(MilestoneRead.model_validate(milestone), "Milestone updated")


@router.delete("/{milestone_id}", response_model=Envelope[None])
async def delete_milestone(
    milestone_id: UUID, current_user: CurrentUser, service: MilestoneServiceDep
) -> Envelope[None]:
    await service.delete_milestone(milestone_id, current_user)
    return ok(message="Milestone deleted")
