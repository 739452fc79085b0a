from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import DomainValidationError, NotFoundError, PermissionDeniedError
from src.teamhub.core.logging import get_logger
from src.teamhub.core.permissions import ResourceAction, has_capability, has_task_permission
from src.teamhub.models import Task, User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import TaskRepository, UserRepository
from src.teamhub.schemas.user import UserSummary
from src.teamhub.schemas.work import TaskCreate, TaskRead, TaskUpdate
from src.teamhub.services.project_access import ProjectAccess

logger = get_logger(__name__)


class TaskService:
    def __init__(
        self,
        task_repo: TaskRepository,
        user_repo: UserRepository,
        access: ProjectAccess,
        session: AsyncSession,
    ):
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.access = access
        self.session = session

    async def _reads(self, tasks: list[Task]) -> list[TaskRead]:
        assignees = await self.user_repo.get_many({t.assignee_id for t in tasks if t.assignee_id})
        reads = []
        for task in tasks:
            read = TaskRead.model_validate(task)
            assignee = assignees.get(task.assignee_id) if task.assignee_id else None
            read.assignee = UserSummary.model_validate(assignee) if assignee else None
            reads.append(read)
        return reads

    async def list_tasks(
        self,
        project_id: UUID,
        status: str | None = None,
        assignee_id: UUID | None = None,
    ) -> list[TaskRead]:
        await self.access.get_project(project_id)
        tasks = await self.task_repo.list_for_project(project_id, status, assignee_id)
        return await self._reads(tasks)

    async def _check_assignee(self, assignee_id: UUID | None) -> None:
        if assignee_id is None:
            return
        assignee = await self.user_repo.get_by_id(assignee_id)
        if assignee is None or not assignee.is_active:
            raise DomainValidationError("Assignee does not exist")

    async def create_task(self, data: TaskCreate, user: User) -> TaskRead:
        if not has_capability(user.access_level, "can_create_task"):
            raise PermissionDeniedError("You do not have permission to create tasks")
        project = await self.access.require_contributor(data.project_id, user)
        await self._check_assignee(data.assignee_id)

        task = Task(
            project_id=project.id,
            title=data.title,
            description=data.description,
            status=data.status.value,
            priority=data.priority.value,
            due_date=data.due_date,
            assignee_id=data.assignee_id or user.id,
            created_by=user.id,
        )
        self.task_repo.add(task)
        try:
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Task created", task_id=str(task.id), project_id=str(project.id))
        return (await self._reads([task]))[0]

    async def _load_for(self, task_id: UUID, user: User, action: ResourceAction) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        if has_task_permission(user.access_level, action, task.assignee_id, user.id):
            return task
        project = await self.access.get_project(task.project_id)
        if project.owner_id == user.id:
            return task
        raise PermissionDeniedError(f"You do not have permission to {action} this task")

    async def update_task(self, task_id: UUID, data: TaskUpdate, user: User) -> TaskRead:
        task = await self._load_for(task_id, user, "edit")

        update_data = data.model_dump(exclude_unset=True)
        for required in ("title", "status", "priority"):
            if required in update_data and update_data[required] is None:
                raise DomainValidationError(f"{required} cannot be removed")
        if "assignee_id" in update_data:
            await self._check_assignee(update_data["assignee_id"])
        for key in ("status", "priority"):
            if key in update_data:
                update_data[key] = update_data[key].value

        for field, value in update_data.items():
            setattr(task, field, value)
        task.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(task)
        except Exception:
            await self.session.rollback()
            raise
        return (await self._reads([task]))[0]

    async def delete_task(self, task_id: UUID, user: User) -> None:
        task = await self._load_for(task_id, user, "delete")
        try:
            await self.task_repo.delete(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Task deleted", task_id=str(task_id), deleted_by=str(user.id))
