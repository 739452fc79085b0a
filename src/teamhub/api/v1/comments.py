from uuid import UUID

from fastapi import APIRouter

from src.teamhub.api.dependencies import BoardServiceDep, CurrentUser
from src.teamhub.schemas import CommentRead, CommentUpdate, Envelope, ok

router = APIRouter(prefix="/comments", tags=["board"])


@router.put(
    "/{comment_id}",
    response_model=Envelope[CommentRead],
    responses={403: {"description": "Only the author can edit"}},
)
async def update_comment(
    comment_id: UUID,
    data: CommentUpdate,
    current_user: CurrentUser,
    service: BoardServiceDep,
) -> Envelope[CommentRead]:
    return ok(await service.update_comment(comment_id, data, current_user), "Comment updated")


@router.delete(
    "/{comment_id}",
    response_model=Envelope[None],
    responses={403: {"description": "Only the author and super-admins can delete"}},
)
async def delete_comment(
    comment_id: UUID, current_user: CurrentUser, service: BoardServiceDep
) -> Envelope[None]:
    await service.delete_comment(comment_id, current_user)
    return ok(message="Comment deleted")
