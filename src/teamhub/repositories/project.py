"""Repositories for projects and project-scoped records."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, or_
from sqlmodel import SQLModel, select

from src.teamhub.models import (
    Message,
    Milestone,
    Project,
    ProjectFile,
    ProjectMember,
    Schedule,
    Task,
)
from src.teamhub.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    # Removed, in this order, before the project row itself
    DEPENDENT_MODELS: tuple[type[SQLModel], ...] = (
        ProjectMember,
        Schedule,
        Task,
        Milestone,
        ProjectFile,
        Message,
    )

    async def list_projects(
        self,
        cursor: str | None,
        limit: int,
        search: str | None = None,
        member_id: UUID | None = None,
    ) -> tuple[list[Project], str | None, bool]:
        """List projects newest first, optionally only those ``member_id`` belongs to."""
        query = select(Project)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Project.name.ilike(pattern),  # type: ignore[attr-defined]
                    Project.description.ilike(pattern),  # type: ignore[union-attr]
                    Project.facility_name.ilike(pattern),  # type: ignore[union-attr]
                )
            )
        if member_id is not None:
            member_projects = select(ProjectMember.project_id).where(
                ProjectMember.user_id == member_id
            )
            query = query.where(
                or_(
                    Project.owner_id == member_id,
                    Project.id.in_(member_projects),  # type: ignore[attr-defined]
                )
            )
        return await self.paginate(query, cursor, limit, Project.created_at)

    async def get_counts(self, project_id: UUID) -> dict[str, int]:
        """Number of members, tasks, schedules, milestones and files of a project."""
        counts: dict[str, int] = {}
        for key, model in (
            ("members", ProjectMember),
            ("tasks", Task),
            ("schedules", Schedule),
            ("milestones", Milestone),
            ("files", ProjectFile),
        ):
            result = await self.session.execute(
                select(func.count())
                .select_from(model)
                .where(model.project_id == project_id)  # type: ignore[attr-defined]
            )
            counts[key] = int(result.scalar_one())
        return counts

    async def delete_dependents(self, model: type[SQLModel], project_id: UUID) -> int:
        """Bulk-delete every ``model`` row of a project. Returns the row count."""
        result = await self.session.execute(
            delete(model).where(model.project_id == project_id)  # type: ignore[attr-defined]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_by_id(self, project_id: UUID) -> int:
        result = await self.session.execute(
            delete(Project).where(Project.id == project_id)  # type: ignore[arg-type]
        )
        return result.rowcount or 0  # type: ignore[attr-defined]


class ProjectMemberRepository(BaseRepository[ProjectMember]):
    model = ProjectMember

    async def get_membership(self, project_id: UUID, user_id: UUID) -> ProjectMember | None:
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_project(self, project_id: UUID) -> list[ProjectMember]:
        result = await self.session.execute(
            select(ProjectMember)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())


class TaskRepository(BaseRepository[Task]):
    model = Task

    async def list_for_project(
        self,
        project_id: UUID,
        status: str | None = None,
        assignee_id: UUID | None = None,
    ) -> list[Task]:
        query: Any = select(Task).where(Task.project_id == project_id)
        if status is not None:
            query = query.where(Task.status == status)
        if assignee_id is not None:
            query = query.where(Task.assignee_id == assignee_id)
        result = await self.session.execute(
            query.order_by(Task.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())


class MilestoneRepository(BaseRepository[Milestone]):
    model = Milestone

    async def list_for_project(self, project_id: UUID) -> list[Milestone]:
        result = await self.session.execute(
            select(Milestone)
            .where(Milestone.project_id == project_id)
            .order_by(Milestone.order.asc(), Milestone.start_date.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())


class ScheduleRepository(BaseRepository[Schedule]):
    model = Schedule

    async def list_for_project(self, project_id: UUID) -> list[Schedule]:
        result = await self.session.execute(
            select(Schedule)
            .where(Schedule.project_id == project_id)
            .order_by(Schedule.start_date.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())


class MessageRepository(BaseRepository[Message]):
    model = Message

    async def list_for_project(
        self, project_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Message], str | None, bool]:
        query = select(Message).where(Message.project_id == project_id)
        return await self.paginate(query, cursor, limit, Message.created_at)
