from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import DomainValidationError, NotFoundError
from src.teamhub.core.logging import get_logger
from src.teamhub.models import Milestone, User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import MilestoneRepository
from src.teamhub.schemas.work import MilestoneCreate, MilestoneUpdate
from src.teamhub.services.project_access import ProjectAccess

logger = get_logger(__name__)


class MilestoneService:
    def __init__(
        self,
        milestone_repo: MilestoneRepository,
        access: ProjectAccess,
        session: AsyncSession,
    ):
        self.milestone_repo = milestone_repo
        self.access = access
        self.session = session

    async def list_milestones(self, project_id: UUID) -> list[Milestone]:
        await self.access.get_project(project_id)
        return await self.milestone_repo.list_for_project(project_id)

    async def create_milestone(self, data: MilestoneCreate, user: User) -> Milestone:
        project = await self.access.require_contributor(data.project_id, user)
        milestone = Milestone(
            project_id=project.id,
            title=data.title,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            status=data.status.value,
            progress=data.progress,
            order=data.order,
            color=data.color,
            dependencies=[str(d) for d in data.dependencies],
        )
        self.milestone_repo.add(milestone)
        try:
            await self.session.commit()
            await self.session.refresh(milestone)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Milestone created", milestone_id=str(milestone.id), project_id=str(project.id))
        return milestone

    async def _load_for(self, milestone_id: UUID, user: User) -> Milestone:
        milestone = await self.milestone_repo.get_by_id(milestone_id)
        if milestone is None:
            raise NotFoundError("Milestone not found")
        await self.access.require_contributor(milestone.project_id, user)
        return milestone

    async def update_milestone(
        self, milestone_id: UUID, data: MilestoneUpdate, user: User
    ) -> Milestone:
        milestone = await self._load_for(milestone_id, user)

        update_data = data.model_dump(exclude_unset=True)
        for required in ("title", "start_date", "end_date", "status", "progress", "order"):
            if required in update_data and update_data[required] is None:
                raise DomainValidationError(f"{required} cannot be removed")
        if "status" in update_data:
            update_data["status"] = update_data["status"].value
        if "dependencies" in update_data:
            deps = update_data["dependencies"] or []
            if milestone.id in deps:
                raise DomainValidationError("A milestone cannot depend on itself")
            update_data["dependencies"] = [str(d) for d in deps]

        for field, value in update_data.items():
            setattr(milestone, field, value)
        if milestone.start_date >= milestone.end_date:
            raise DomainValidationError("start_date must be before end_date")

        milestone.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(milestone)
        except Exception:
            await self.session.rollback()
            raise
        return milestone

    async def delete_milestone(self, milestone_id: UUID, user: User) -> None:
        milestone = await self._load_for(milestone_id, user)
        try:
            await self.milestone_repo.delete(milestone)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Milestone deleted", milestone_id=str(milestone_id), deleted_by=str(user.id))
