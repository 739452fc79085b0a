"""Project, membership and chat schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from src.teamhub.models.enums import ProjectRole, ProjectStatus


class _ProjectFields(BaseModel):
    description: str | None = Field(default=None, max_length=2000)
    color: str | None = Field(default=None, max_length=20)
    facility_type: str | None = Field(default=None, max_length=100)
    facility_name: str | None = Field(default=None, max_length=200)
    address: str | None = Field(default=None, max_length=500)
    diagnosis_type: str | None = Field(default=None, max_length=100)
    contact_person: str | None = Field(default=None, max_length=100)
    contact_phone: str | None = Field(default=None, max_length=20)
    contact_email: EmailStr | None = None
    special_notes: str | None = Field(default=None, max_length=2000)
    start_date: datetime | None = None
    end_date: datetime | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "_ProjectFields":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ProjectCreate(_ProjectFields):
    name: str = Field(min_length=1, max_length=200)
    status: ProjectStatus = ProjectStatus.PLANNING

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectUpdate(_ProjectFields):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    status: ProjectStatus | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectCounts(BaseModel):
    members: int = 0
    tasks: int = 0
    schedules: int = 0
    milestones: int = 0
    files: int = 0


class ProjectRead(BaseModel):
    id: UUID
    owner_id: UUID
    name: str
    description: str | None
    color: str | None
    status: str
    facility_type: str | None
    facility_name: str | None
    address: str | None
    diagnosis_type: str | None
    contact_person: str | None
    contact_phone: str | None
    contact_email: str | None
    special_notes: str | None
    start_date: datetime | None
    end_date: datetime | None
    created_at: datetime
    updated_at: datetime
    counts: ProjectCounts | None = None

    model_config = {"from_attributes": True}


class MemberAdd(BaseModel):
    user_id: UUID
    role: ProjectRole = ProjectRole.MEMBER
    specialty: str | None = Field(default=None, max_length=100)

    @field_validator("role")
    @classmethod
    def reject_owner(cls, v: ProjectRole) -> ProjectRole:
        if v == ProjectRole.OWNER:
            raise ValueError("Ownership cannot be granted through membership")
        return v


class MemberRead(BaseModel):
    id: UUID
    project_id: UUID
    user_id: UUID
    role: str
    specialty: str | None
    joined_at: datetime
    user_name: str | None = None
    user_email: str | None = None


class MessageCreate(BaseModel):
    content: str = Field(min_length=1, max_length=4000)


class MessageRead(BaseModel):
    id: UUID
    project_id: UUID
    author_id: UUID
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
