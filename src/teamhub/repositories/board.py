"""Repositories for posts and comments."""

from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, update
from sqlmodel import select

from src.teamhub.models import Comment, Post
from src.teamhub.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    model = Post

    def _filtered(self, query: Any, search: str | None, notice: bool | None) -> Any:
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Post.title.ilike(pattern),  # type: ignore[attr-defined]
                    Post.content.ilike(pattern),  # type: ignore[attr-defined]
                )
            )
        if notice is not None:
            query = query.where(Post.is_notice == notice)
        return query

    async def list_page(
        self,
        page: int,
        limit: int,
        search: str | None = None,
        notice: bool | None = None,
    ) -> tuple[list[Post], int]:
        """One page of posts, notices first, then newest first. Returns (posts, total)."""
        total_result = await self.session.execute(
            self._filtered(select(func.count()).select_from(Post), search, notice)
        )
        total = int(total_result.scalar_one())

        query = self._filtered(select(Post), search, notice)
        result = await self.session.execute(
            query.order_by(
                Post.is_notice.desc(),  # type: ignore[attr-defined]
                Post.created_at.desc(),  # type: ignore[attr-defined]
            )
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def increment_view_count(self, post_id: UUID) -> int:
        """Atomically bump the view counter. Returns affected rows."""
        result = await self.session.execute(
            update(Post)
            .where(Post.id == post_id)  # type: ignore[arg-type]
            .values(view_count=Post.view_count + 1)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    async def list_for_post(self, post_id: UUID) -> list[Comment]:
        result = await self.session.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def count_by_post(self, post_ids: list[UUID]) -> dict[UUID, int]:
        if not post_ids:
            return {}
        result = await self.session.execute(
            select(Comment.post_id, func.count())
            .where(Comment.post_id.in_(post_ids))  # type: ignore[attr-defined]
            .group_by(Comment.post_id)
        )
        return {post_id: int(count) for post_id, count in result.all()}
