from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import DomainValidationError, NotFoundError, PermissionDeniedError
from src.teamhub.core.logging import get_logger
from src.teamhub.core.permissions import has_capability
from src.teamhub.models import Schedule, User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import ScheduleRepository
from src.teamhub.schemas.work import ScheduleCreate, ScheduleUpdate
from src.teamhub.services.project_access import ProjectAccess

logger = get_logger(__name__)


def _require_notice_permission(user: User) -> None:
    if not has_capability(user.access_level, "can_manage_team_schedule"):
        raise PermissionDeniedError("Only administrators can publish notice schedules")


class ScheduleService:
    """Project calendar entries."""

    def __init__(
        self,
        schedule_repo: ScheduleRepository,
        access: ProjectAccess,
        session: AsyncSession,
    ):
        self.schedule_repo = schedule_repo
        self.access = access
        self.session = session

    async def list_schedules(self, project_id: UUID) -> list[Schedule]:
        await self.access.get_project(project_id)
        return await self.schedule_repo.list_for_project(project_id)

    async def create_schedule(self, data: ScheduleCreate, user: User) -> Schedule:
        project = await self.access.require_contributor(data.project_id, user)
        if data.is_notice:
            _require_notice_permission(user)

        schedule = Schedule(
            project_id=project.id,
            title=data.title,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            is_notice=data.is_notice,
            priority=data.priority.value,
            created_by=user.id,
        )
        self.schedule_repo.add(schedule)
        try:
            await self.session.commit()
            await self.session.refresh(schedule)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Schedule created", schedule_id=str(schedule.id), project_id=str(project.id))
        return schedule

    async def _load_for(self, schedule_id: UUID, user: User) -> Schedule:
        schedule = await self.schedule_repo.get_by_id(schedule_id)
        if schedule is None:
            raise NotFoundError("Schedule not found")
        await self.access.require_contributor(schedule.project_id, user)
        return schedule

    async def update_schedule(self, schedule_id: UUID, data: ScheduleUpdate, user: User) -> Schedule:
        """Apply only the fields present in the request."""
        schedule = await self._load_for(schedule_id, user)

        update_data = data.model_dump(exclude_unset=True)
        for required in ("title", "start_date", "end_date", "is_notice", "priority"):
            if required in update_data and update_data[required] is None:
                raise DomainValidationError(f"{required} cannot be removed")
        if update_data.get("is_notice") or (schedule.is_notice and "is_notice" in update_data):
            _require_notice_permission(user)
        if "priority" in update_data:
            update_data["priority"] = update_data["priority"].value

        for field, value in update_data.items():
            setattr(schedule, field, value)
        if schedule.start_date > schedule.end_date:
            raise DomainValidationError("start_date must not be after end_date")

        schedule.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(schedule)
        except Exception:
            await self.session.rollback()
            raise
        return schedule

    async def delete_schedule(self, schedule_id: UUID, user: User) -> None:
        schedule = await self._load_for(schedule_id, user)
        if schedule.is_notice:
            _require_notice_permission(user)
        try:
            await self.schedule_repo.delete(schedule)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Schedule deleted", schedule_id=str(schedule_id), deleted_by=str(user.id))
