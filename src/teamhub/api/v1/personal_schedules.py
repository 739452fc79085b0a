"""Personal calendar endpoints (document store)."""

import datetime as dt
from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.teamhub.api.dependencies import (
    CurrentUser,
    PersonalScheduleServiceDep,
    RequireCapability,
)
from src.teamhub.models import User
from src.teamhub.models.base import utc_now
from src.teamhub.schemas import (
    Envelope,
    PersonalScheduleCreate,
    PersonalScheduleRead,
    PersonalScheduleUpdate,
    ok,
)

router = APIRouter(prefix="/schedules/user", tags=["schedules"])

ScheduleViewer = Annotated[User, Depends(RequireCapability("can_view_schedule"))]


@router.get(
    "",
    response_model=Envelope[list[PersonalScheduleRead]],
    responses={503: {"description": "Document store unavailable"}},
)
async def list_personal_schedules(
    current_user: ScheduleViewer,
    service: PersonalScheduleServiceDep,
    date: dt.date | None = None,
) -> Envelope[list[PersonalScheduleRead]]:
    """The caller's entries plus every team event on a day (default today, UTC)."""
    day = date or utc_now().date()
    return ok(await service.list_for_date(current_user, day))


@router.post(
    "",
    response_model=Envelope[PersonalScheduleRead],
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Team events need can_manage_team_schedule"}},
)
async def create_personal_schedule(
    data: PersonalScheduleCreate,
    current_user: CurrentUser,
    service: PersonalScheduleServiceDep,
) -> Envelope[PersonalScheduleRead]:
    return ok(await service.create(data, current_user), "Schedule created")


@router.patch(
    "/{schedule_id}",
    response_model=Envelope[PersonalScheduleRead],
    responses={403: {"description": "Only the owner can edit"}},
)
async def update_personal_schedule(
    schedule_id: str,
    data: PersonalScheduleUpdate,
    current_user: CurrentUser,
    service: PersonalScheduleServiceDep,
) -> Envelope[PersonalScheduleRead]:
    return ok(await service.update(schedule_id, data, current_user), "Schedule updated")


@router.delete("/{schedule_id}", response_model=Envelope[None])
async def delete_personal_schedule(
    schedule_id: str,
    current_user: CurrentUser,
    service: PersonalScheduleServiceDep,
) -> Envelope[None]:
    await service.delete(schedule_id, current_user)
    return ok(message="Schedule deleted")
