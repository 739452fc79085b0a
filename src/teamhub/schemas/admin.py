from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.teamhub.core.permissions import AccessLevel


class LevelChangeRequest(BaseModel):
    user_id: UUID
    new_level: AccessLevel
    reason: str | None = Field(default=None, max_length=500)


class ToggleActiveRequest(BaseModel):
    user_id: UUID
    reason: str | None = Field(default=None, max_length=500)


class UserManagementLogRead(BaseModel):
    id: UUID
    admin_id: UUID
    target_user_id: UUID
    action: str
    old_level: int | None
    new_level: int | None
    reason: str | None
    created_at: datetime
    admin_name: str | None = None
    target_user_name: str | None = None

    model_config = {"from_attributes": True}
