"""Task, milestone and schedule schemas."""

import datetime as dt
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from src.teamhub.models.enums import (
    MilestoneStatus,
    SchedulePriority,
    TaskPriority,
    TaskStatus,
)
from src.teamhub.schemas.user import UserSummary

# --- Tasks ---


class TaskCreate(BaseModel):
    project_id: UUID
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assignee_id: UUID | None = None


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assignee_id: UUID | None = None


class TaskRead(BaseModel):
    id: UUID
    project_id: UUID
    title: str
    description: str | None
    status: str
    priority: str
    due_date: datetime | None
    assignee_id: UUID | None
    created_by: UUID
    created_at: datetime
    updated_at: datetime
    assignee: UserSummary | None = None

    model_config = {"from_attributes": True}


# --- Milestones ---


class MilestoneCreate(BaseModel):
    project_id: UUID
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    start_date: datetime
    end_date: datetime
    status: MilestoneStatus = MilestoneStatus.NOT_STARTED
    progress: int = Field(default=0, ge=0, le=100)
    order: int = Field(default=1, ge=1)
    color: str | None = Field(default=None, max_length=20)
    dependencies: list[UUID] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_range(self) -> "MilestoneCreate":
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class MilestoneUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: MilestoneStatus | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    order: int | None = Field(default=None, ge=1)
    color: str | None = Field(default=None, max_length=20)
    dependencies: list[UUID] | None = None


class MilestoneRead(BaseModel):
    id: UUID
    project_id: UUID
    title: str
    description: str | None
    start_date: datetime
    end_date: datetime
    status: str
    progress: int
    order: int
    color: str | None
    dependencies: list[UUID]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# --- Project schedules ---


class ScheduleCreate(BaseModel):
    project_id: UUID
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    start_date: datetime
    end_date: datetime
    is_notice: bool = False
    priority: SchedulePriority = SchedulePriority.NORMAL

    @model_validator(mode="after")
    def check_range(self) -> "ScheduleCreate":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ScheduleUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_notice: bool | None = None
    priority: SchedulePriority | None = None


class ScheduleRead(BaseModel):
    id: UUID
    project_id: UUID
    title: str
    description: str | None
    start_date: datetime
    end_date: datetime
    is_notice: bool
    priority: str
    created_by: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# --- Personal schedules (document store) ---


class PersonalScheduleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    date: dt.date
    is_team_event: bool = False


class PersonalScheduleUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    date: dt.date | None = None
    is_completed: bool | None = None
    is_team_event: bool | None = None


class ScheduleAuthor(BaseModel):
    name: str
    email: str
    access_level: int


class PersonalScheduleRead(BaseModel):
    id: str
    user_id: UUID
    title: str
    description: str | None = None
    date: dt.date
    is_completed: bool = False
    is_team_event: bool = False
    author: ScheduleAuthor
    created_at: datetime
    updated_at: datetime
