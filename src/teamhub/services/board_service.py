"""Bulletin board service - posts, comments and view counts."""

from uuid import UUID

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import DomainValidationError, NotFoundError, PermissionDeniedError
from src.teamhub.core.logging import get_logger
from src.teamhub.core.permissions import can_delete_content, can_edit_content, is_admin
from src.teamhub.models import Comment, Post, User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import CommentRepository, PostRepository, UserRepository
from src.teamhub.schemas.board import (
    CommentCreate,
    CommentRead,
    CommentUpdate,
    PostCreate,
    PostDetail,
    PostRead,
    PostType,
    PostUpdate,
)
from src.teamhub.schemas.pagination import NumberedPage, PageInfo
from src.teamhub.schemas.user import UserSummary

logger = get_logger(__name__)


def _require_notice_permission(user: User) -> None:
    if not is_admin(user.access_level):
        raise PermissionDeniedError("Only administrators can publish notices")


class BoardService:
    def __init__(
        self,
        post_repo: PostRepository,
        comment_repo: CommentRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.post_repo = post_repo
        self.comment_repo = comment_repo
        self.user_repo = user_repo
        self.session = session

    async def _authors(self, author_ids: set[UUID]) -> dict[UUID, UserSummary]:
        users = await self.user_repo.get_many(author_ids)
        return {uid: UserSummary.model_validate(u) for uid, u in users.items()}

    async def list_posts(
        self,
        page: int,
        limit: int,
        search: str | None = None,
        post_type: PostType = PostType.ALL,
    ) -> NumberedPage[PostRead]:
        notice = None if post_type == PostType.ALL else post_type == PostType.NOTICE
        posts, total = await self.post_repo.list_page(page, limit, search=search, notice=notice)

        comment_counts = await self.comment_repo.count_by_post([p.id for p in posts])
        authors = await self._authors({p.author_id for p in posts})
        items = []
        for post in posts:
            read = PostRead.model_validate(post)
            read.comment_count = comment_counts.get(post.id, 0)
            read.author = authors.get(post.author_id)
            items.append(read)
        return NumberedPage(items=items, pagination=PageInfo.build(page, limit, total))

    async def _get_post(self, post_id: UUID) -> Post:
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def get_post(self, post_id: UUID) -> PostDetail:
        post = await self._get_post(post_id)
        comments = await self.comment_repo.list_for_post(post.id)
        authors = await self._authors({post.author_id} | {c.author_id for c in comments})

        detail = PostDetail.model_validate(post)
        detail.author = authors.get(post.author_id)
        detail.comment_count = len(comments)
        detail.comments = [self._comment_read(c, authors) for c in comments]
        return detail

    @staticmethod
    def _comment_read(comment: Comment, authors: dict[UUID, UserSummary]) -> CommentRead:
        read = CommentRead.model_validate(comment)
        read.author = authors.get(comment.author_id)
        return read

    async def create_post(self, data: PostCreate, user: User) -> PostDetail:
        if data.is_notice:
            _require_notice_permission(user)

        post = Post(
            author_id=user.id,
            title=data.title,
            content=data.content,
            is_notice=data.is_notice,
        )
        self.post_repo.add(post)
        try:
            await self.session.commit()
            await self.session.refresh(post)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Post created", post_id=str(post.id), is_notice=post.is_notice)
        return await self.get_post(post.id)

    async def update_post(self, post_id: UUID, data: PostUpdate, user: User) -> PostDetail:
        post = await self._get_post(post_id)
        if not can_edit_content(user.access_level, post.author_id, user.id):
            raise PermissionDeniedError("You can only edit your own posts")

        update_data = data.model_dump(exclude_unset=True)
        for required in ("title", "content", "is_notice"):
            if required in update_data and update_data[required] is None:
                raise DomainValidationError(f"{required} cannot be removed")
        if "is_notice" in update_data and update_data["is_notice"] != post.is_notice:
            _require_notice_permission(user)

        for field, value in update_data.items():
            setattr(post, field, value)
        post.updated_at = utc_now()
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return await self.get_post(post.id)

    async def delete_post(self, post_id: UUID, user: User) -> None:
        """Delete a post together with its comments."""
        post = await self._get_post(post_id)
        if not can_delete_content(user.access_level, post.author_id, user.id):
            raise PermissionDeniedError("You do not have permission to delete this post")

        try:
            await self.session.execute(
                sa_delete(Comment).where(Comment.post_id == post.id)  # type: ignore[arg-type]
            )
            await self.post_repo.delete(post)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Post deleted", post_id=str(post_id), deleted_by=str(user.id))

    async def record_view(self, post_id: UUID) -> int:
        """Increment the view counter. Returns the new count."""
        try:
            if not await self.post_repo.increment_view_count(post_id):
                raise NotFoundError("Post not found")
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        post = await self._get_post(post_id)
        await self.session.refresh(post)
        return post.view_count

    # --- Comments ---

    async def list_comments(self, post_id: UUID) -> list[CommentRead]:
        await self._get_post(post_id)
        comments = await self.comment_repo.list_for_post(post_id)
        authors = await self._authors({c.author_id for c in comments})
        return [self._comment_read(c, authors) for c in comments]

    async def add_comment(self, post_id: UUID, data: CommentCreate, user: User) -> CommentRead:
        post = await self._get_post(post_id)
        comment = Comment(post_id=post.id, author_id=user.id, content=data.content)
        self.comment_repo.add(comment)
        try:
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception:
            await self.session.rollback()
            raise
        return self._comment_read(comment, {user.id: UserSummary.model_validate(user)})

    async def _get_comment(self, comment_id: UUID) -> Comment:
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    async def update_comment(self, comment_id: UUID, data: CommentUpdate, user: User) -> CommentRead:
        comment = await self._get_comment(comment_id)
        if comment.author_id != user.id:
            raise PermissionDeniedError("You can only edit your own comments")

        comment.content = data.content
        comment.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception:
            await self.session.rollback()
            raise
        return self._comment_read(comment, {user.id: UserSummary.model_validate(user)})

    async def delete_comment(self, comment_id: UUID, user: User) -> None:
        comment = await self._get_comment(comment_id)
        if not can_delete_content(user.access_level, comment.author_id, user.id):
            raise PermissionDeniedError("You do not have permission to delete this comment")
        try:
            await self.comment_repo.delete(comment)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Comment deleted", comment_id=str(comment_id), deleted_by=str(user.id))
