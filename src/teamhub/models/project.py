"""Project, membership and project-scoped work item models."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.teamhub.models.base import utc_now
from src.teamhub.models.enums import (
    MilestoneStatus,
    ProjectRole,
    ProjectStatus,
    SchedulePriority,
    TaskPriority,
    TaskStatus,
)


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: UUID = Field(foreign_key="users.id", index=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=2000)
    color: str | None = Field(default=None, max_length=20)
    status: str = Field(default=ProjectStatus.PLANNING.value, max_length=20, index=True)

    # Facility metadata
    facility_type: str | None = Field(default=None, max_length=100)
    facility_name: str | None = Field(default=None, max_length=200)
    address: str | None = Field(default=None, max_length=500)
    diagnosis_type: str | None = Field(default=None, max_length=100)
    contact_person: str | None = Field(default=None, max_length=100)
    contact_phone: str | None = Field(default=None, max_length=20)
    contact_email: str | None = Field(default=None, max_length=255)
    special_notes: str | None = Field(default=None, max_length=2000)

    start_date: datetime | None = Field(default=None)
    end_date: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_member"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    role: str = Field(default=ProjectRole.MEMBER.value, max_length=20)
    specialty: str | None = Field(default=None, max_length=100)
    joined_at: datetime = Field(default_factory=utc_now)


class Task(SQLModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_project_created", "project_id", "created_at"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: str = Field(default=TaskStatus.TODO.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    due_date: datetime | None = Field(default=None)
    assignee_id: UUID | None = Field(default=None, foreign_key="users.id", index=True)
    created_by: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Milestone(SQLModel, table=True):
    __tablename__ = "milestones"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    start_date: datetime
    end_date: datetime
    status: str = Field(default=MilestoneStatus.NOT_STARTED.value, max_length=20)
    progress: int = Field(default=0, ge=0, le=100)
    order: int = Field(default=1)
    color: str | None = Field(default=None, max_length=20)
    # Ids of milestones that must finish first
    dependencies: list[Any] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Schedule(SQLModel, table=True):
    """Project calendar entry."""

    __tablename__ = "schedules"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    start_date: datetime
    end_date: datetime
    is_notice: bool = Field(default=False)
    priority: str = Field(default=SchedulePriority.NORMAL.value, max_length=20)
    created_by: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Message(SQLModel, table=True):
    """Project chat message."""

    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_project_created", "project_id", "created_at"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    author_id: UUID = Field(foreign_key="users.id")
    content: str = Field(max_length=4000)
    created_at: datetime = Field(default_factory=utc_now)
