"""Project calendar endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.teamhub.api.dependencies import CurrentUser, RequireCapability, ScheduleServiceDep
from src.teamhub.models import User
from src.teamhub.schemas import Envelope, ScheduleCreate, ScheduleRead, ScheduleUpdate, ok

router = APIRouter(prefix="/schedules", tags=["schedules"])

ScheduleViewer = Annotated[User, Depends(RequireCapability("can_view_schedule"))]


@router.get("", response_model=Envelope[list[ScheduleRead]])
async def list_schedules(
    project_id: UUID, _: ScheduleViewer, service: ScheduleServiceDep
) -> Envelope[list[ScheduleRead]]:
    schedules = await service.list_schedules(project_id)
    return ok([ScheduleRead.model_validate(s) for s in schedules])


@router.post(
    "",
    response_model=Envelope[ScheduleRead],
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Not a contributor, or notice without team permission"}},
)
async def create_schedule(
    data: ScheduleCreate, current_user: CurrentUser, service: ScheduleServiceDep
) -> Envelope[ScheduleRead]:
    schedule = await service.create_schedule(data, current_user)
    return ok(ScheduleRead.model_validate(schedule), "Schedule created")


@router.patch("/{schedule_id}", response_model=Envelope[ScheduleRead])
async def update_schedule(
    schedule_id: UUID,
    data: ScheduleUpdate,
    current_user: CurrentUser,
    service: ScheduleServiceDep,
) -> Envelope[ScheduleRead]:
    """Update only the fields present in the body."""
    schedule = await service.update_schedule(schedule_id, data, current_user)
    return ok(ScheduleRead.model_validate(schedule), "Schedule updated")


@router.delete("/{schedule_id}", response_model=Envelope[None])
async def delete_schedule(
    schedule_id: UUID, current_user: CurrentUser, service: ScheduleServiceDep
) -> Envelope[None]:
    await service.delete_schedule(schedule_id, current_user)
    return ok(message="Schedule deleted")
