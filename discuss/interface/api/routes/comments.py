"""Comment routes.

Mutations answer with the resulting tree state. A remote failure is not an
HTTP error: the optimistic change has already been applied or rolled back,
and `ok` is false with the message in `state.error`.
"""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from discuss.application.usecase.comment import (
    CommentTreeResponse,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentUseCase,
    GetCommentTreeUseCase,
    PostReplyRequest,
    PostReplyResponse,
    PostReplyUseCase,
    ToggleLikeRequest,
    ToggleLikeUseCase,
)
from discuss.domain.error import NotAuthorizedError, NotFoundError

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class PostReplyAPIRequest(BaseModel):
    """API request for posting a comment."""

    text: str = Field(min_length=1, max_length=10000)
    parent_id: int | None = None  # Parent comment ID for replies


class EditCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    text: str = Field(min_length=1, max_length=10000)


@router.get("", response_model=CommentTreeResponse)
async def get_comments(
    use_case: FromDishka[GetCommentTreeUseCase],
) -> CommentTreeResponse:
    """Current comment tree of the open thread."""
    return await use_case.execute()


@router.post("", response_model=PostReplyResponse)
async def post_reply(
    request: PostReplyAPIRequest,
    use_case: FromDishka[PostReplyUseCase],
) -> PostReplyResponse:
    """Post a comment to the open thread or reply to a comment.

    Raises:
        HTTPException: 400 without an open thread, 404 for an unknown parent
    """
    try:
        use_case_request = PostReplyRequest(
            text=request.text, parent_id=request.parent_id
        )
        return await use_case.execute(use_case_request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        logfire.warn("Reply validation error", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/{comment_id}/like", response_model=CommentTreeResponse)
async def toggle_like(
    comment_id: int,
    use_case: FromDishka[ToggleLikeUseCase],
) -> CommentTreeResponse:
    """Like or unlike a comment."""
    try:
        return await use_case.execute(ToggleLikeRequest(comment_id=comment_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{comment_id}", response_model=CommentTreeResponse)
async def edit_comment(
    comment_id: int,
    request: EditCommentAPIRequest,
    use_case: FromDishka[EditCommentUseCase],
) -> CommentTreeResponse:
    """Edit one's own comment.

    Raises:
        HTTPException: 403 for someone else's comment, 404 if unknown
    """
    try:
        use_case_request = EditCommentRequest(comment_id=comment_id, text=request.text)
        return await use_case.execute(use_case_request)
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment edit attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{comment_id}", response_model=CommentTreeResponse)
async def delete_comment(
    comment_id: int,
    use_case: FromDishka[DeleteCommentUseCase],
) -> CommentTreeResponse:
    """Delete one's own comment together with its replies.

    Raises:
        HTTPException: 403 for someone else's comment, 404 if unknown
    """
    try:
        return await use_case.execute(DeleteCommentRequest(comment_id=comment_id))
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
