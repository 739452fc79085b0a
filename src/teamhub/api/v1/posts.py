"""Bulletin board endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.teamhub.api.dependencies import BoardServiceDep, CurrentUser, RequireCapability
from src.teamhub.models import User
from src.teamhub.schemas import (
    CommentCreate,
    CommentRead,
    Envelope,
    NumberedPage,
    PostCreate,
    PostDetail,
    PostRead,
    PostType,
    PostUpdate,
    ok,
)

router = APIRouter(prefix="/posts", tags=["board"])

PostViewer = Annotated[User, Depends(RequireCapability("can_view_post"))]
PostWriter = Annotated[User, Depends(RequireCapability("can_create_post"))]


@router.get(
    "",
    response_model=Envelope[NumberedPage[PostRead]],
    responses={
        200: {
            "description": "One page of posts, notices first",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "items": [
                                {
                                    "id": "550e8400-e29b-41d4-a716-446655440000",
                                    "author_id": "6fa459ea-ee8a-3ca4-894e-db77e160355e",
                                    "title": "3월 현장점검 일정 안내",
                                    "content": "...",
                                    "is_notice": True,
                                    "view_count": 42,
                                    "created_at": "2024-03-01T09:00:00",
                                    "updated_at": "2024-03-01T09:00:00",
                                    "comment_count": 2,
                                    "author": {
                                        "id": "6fa459ea-ee8a-3ca4-894e-db77e160355e",
                                        "name": "박관리",
                                        "email": "park@example.com",
                                        "access_level": 1,
                                    },
                                }
                            ],
                            "pagination": {"page": 1, "limit": 10, "total": 1, "total_pages": 1},
                        },
                        "message": None,
                    }
                }
            },
        }
    },
)
async def list_posts(
    _: PostViewer,
    service: BoardServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    search: Annotated[str | None, Query(max_length=100)] = None,
    type: PostType = PostType.ALL,
) -> Envelope[NumberedPage[PostRead]]:
    return ok(await service.list_posts(page, limit, search=search, post_type=type))


@router.post(
    "",
    response_model=Envelope[PostDetail],
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Notices require administrator level"}},
)
async def create_post(
    data: PostCreate, current_user: PostWriter, service: BoardServiceDep
) -> Envelope[PostDetail]:
    return ok(await service.create_post(data, current_user), "Post created")


@router.get(
    "/{post_id}",
    response_model=Envelope[PostDetail],
    responses={404: {"description": "Post not found"}},
)
async def get_post(
    post_id: UUID, _: PostViewer, service: BoardServiceDep
) -> Envelope[PostDetail]:
    """A post with its comments. Does not count as a view."""
    return ok(await service.get_post(post_id))


@router.put(
    "/{post_id}",
    response_model=Envelope[PostDetail],
    responses={403: {"description": "Only the author and administrators can edit"}},
)
async def update_post(
    post_id: UUID,
    data: PostUpdate,
    current_user: CurrentUser,
    service: BoardServiceDep,
) -> Envelope[PostDetail]:
    return ok(await service.update_post(post_id, data, current_user), "Post updated")


@router.delete(
    "/{post_id}",
    response_model=Envelope[None],
    responses={403: {"description": "Only the author and super-admins can delete"}},
)
async def delete_post(
    post_id: UUID, current_user: CurrentUser, service: BoardServiceDep
) -> Envelope[None]:
    await service.delete_post(post_id, current_user)
    return ok(message="Post deleted")


@router.post("/{post_id}/view", response_model=Envelope[int])
async def record_view(
    post_id: UUID, _: PostViewer, service: BoardServiceDep
) -> Envelope[int]:
    """Count one view. Returns the new view count."""
    return ok(await service.record_view(post_id))


@router.get("/{post_id}/comments", response_model=Envelope[list[CommentRead]])
async def list_comments(
    post_id: UUID, _: PostViewer, service: BoardServiceDep
) -> Envelope[list[CommentRead]]:
    return ok(await service.list_comments(post_id))


@router.post(
    "/{post_id}/comments",
    response_model=Envelope[CommentRead],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: UUID,
    data: CommentCreate,
    current_user: PostWriter,
    service: BoardServiceDep,
) -> Envelope[CommentRead]:
    return ok(await service.add_comment(post_id, data, current_user), "Comment added")
