from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.teamhub.core.permissions import level_label
from src.teamhub.core.security import (
    PasswordStrength,
    validate_name,
    validate_password,
    validate_phone,
    validate_position,
)
from src.teamhub.models import User


class UserRead(BaseModel):
    id: UUID
    email: EmailStr
    name: str
    phone: str | None
    position: str | None
    avatar_url: str | None
    access_level: int
    level_label: str
    is_active: bool
    last_seen_at: datetime | None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            phone=user.phone,
            position=user.position,
            avatar_url=user.avatar_url,
            access_level=user.access_level,
            level_label=level_label(user.access_level),
            is_active=user.is_active,
            last_seen_at=user.last_seen_at,
            created_at=user.created_at,
        )


class UserSummary(BaseModel):
    """Embedded author/assignee info."""

    id: UUID
    name: str
    email: str
    access_level: int

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=20)
    phone: str | None = None
    position: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        return validate_name(v) if v is not None else None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator("position")
    @classmethod
    def check_position(cls, v: str | None) -> str | None:
        return validate_position(v)


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(max_length=100)

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str) -> str:
        return validate_password(v)


class PermissionsRead(BaseModel):
    access_level: int
    level_label: str
    capabilities: dict[str, bool]


class PresenceRead(BaseModel):
    user: UserSummary
    status: str  # online, away, offline
    last_seen_at: datetime | None
    last_seen_text: str


class RegistrationResult(BaseModel):
    user: UserRead
    password_strength: PasswordStrength


class PresenceList(BaseModel):
    users: list[PresenceRead]
    online_count: int
    total_count: int
