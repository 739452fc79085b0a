"""Bulletin board schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from src.teamhub.schemas.user import UserSummary


class PostType(str, Enum):
    ALL = "all"
    NOTICE = "notice"
    NORMAL = "normal"


class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=20000)
    is_notice: bool = False


class PostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1, max_length=20000)
    is_notice: bool | None = None


class PostRead(BaseModel):
    id: UUID
    author_id: UUID
    title: str
    content: str
    is_notice: bool
    view_count: int
    created_at: datetime
    updated_at: datetime
    comment_count: int = 0
    author: UserSummary | None = None

    model_config = {"from_attributes": True}


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=2000)


class CommentUpdate(BaseModel):
    content: str = Field(min_length=1, max_length=2000)


class CommentRead(BaseModel):
    id: UUID
    post_id: UUID
    author_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime
    author: UserSummary | None = None

    model_config = {"from_attributes": True}


class PostDetail(PostRead):
    comments: list[CommentRead] = Field(default_factory=list)
