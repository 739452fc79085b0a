"""Task endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.teamhub.api.dependencies import CurrentUser, RequireCapability, TaskServiceDep
from src.teamhub.core.exceptions import DomainValidationError
from src.teamhub.models import TaskStatus, User
from src.teamhub.schemas import Envelope, TaskCreate, TaskRead, TaskUpdate, ok

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskViewer = Annotated[User, Depends(RequireCapability("can_view_task"))]


@router.get(
    "",
    response_model=Envelope[list[TaskRead]],
    responses={
        400: {"description": "project_id is required"},
        404: {"description": "Project not found"},
    },
)
async def list_tasks(
    _: TaskViewer,
    service: TaskServiceDep,
    project_id: UUID | None = None,
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
    assignee_id: UUID | None = None,
) -> Envelope[list[TaskRead]]:
    """Tasks of one project, newest first."""
    if project_id is None:
        raise DomainValidationError("project_id is required")
    tasks = await service.list_tasks(
        project_id, status_filter.value if status_filter else None, assignee_id
    )
    return ok(tasks)


@router.post(
    "",
    response_model=Envelope[TaskRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "Not a contributor of the project"},
        404: {"description": "Project not found"},
    },
)
async def create_task(
    data: TaskCreate, current_user: CurrentUser, service: TaskServiceDep
) -> Envelope[TaskRead]:
    """Create a task. Unassigned tasks go to their creator."""
    return ok(await service.create_task(data, current_user), "Task created")


@router.put(
    "/{task_id}",
    response_model=Envelope[TaskRead],
    responses={
        403: {"description": "Only the assignee, the project owner and administrators"},
        404: {"description": "Task not found"},
    },
)
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    current_user: CurrentUser,
    service: TaskServiceDep,
) -> Envelope[TaskRead]:
    return ok(await service.update_task(task_id, data, current_user), "Task updated")


@router.delete("/{task_id}", response_model=Envelope[None])
async def delete_task(
    task_id: UUID, current_user: CurrentUser, service: TaskServiceDep
) -> Envelope[None]:
    await service.delete_task(task_id, current_user)
    return ok(message="Task deleted")
