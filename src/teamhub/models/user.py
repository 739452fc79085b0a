"""User, refresh token and user management log models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.teamhub.core.permissions import AccessLevel
from src.teamhub.models.base import utc_now


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    name: str = Field(max_length=20)
    # None for accounts that only ever signed in through Google
    hashed_password: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    position: str | None = Field(default=None, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=500)
    access_level: int = Field(default=AccessLevel.MEMBER.value, index=True)
    is_active: bool = Field(default=True)
    last_seen_at: datetime | None = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class RefreshToken(SQLModel, table=True):
    """Refresh token storage. Only the SHA256 of the token is kept."""

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=255, unique=True, index=True)
    expires_at: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
    revoked: bool = Field(default=False)


class UserManagementLog(SQLModel, table=True):
    """Append-only record of level changes and (de)activations."""

    __tablename__ = "user_management_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    admin_id: UUID = Field(foreign_key="users.id", index=True)
    target_user_id: UUID = Field(foreign_key="users.id", index=True)
    action: str = Field(max_length=32)  # UserManagementAction value
    old_level: int | None = Field(default=None)
    new_level: int | None = Field(default=None)
    reason: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now, index=True)
