"""Post reply use case."""

from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import NotFoundError
from discuss.domain.model.comment import CommentNode
from discuss.domain.service import CommentService
from discuss.domain.service.comment_tree import find_comment
from discuss.domain.value import CommentId

from .common import CommentTreeResponse, require_thread


class PostReplyRequest(BaseModel):
    """Post reply request."""

    text: str = Field(min_length=1)
    parent_id: int | None = None  # None posts to the thread itself


class PostReplyResponse(CommentTreeResponse):
    """Post reply response."""

    comment: CommentNode | None = None


class PostReplyUseCase(BaseUseCase):
    """Use case for posting a comment or a reply to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize post reply use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: PostReplyRequest) -> PostReplyResponse:
        """Execute post reply flow.

        Raises:
            ValueError: If no thread is open or the text is blank
            NotFoundError: If the parent comment is not in the tree
        """
        require_thread(self.comment_service)
        if not request.text.strip():
            raise ValueError("Reply text cannot be empty")

        parent_id = CommentId(request.parent_id) if request.parent_id is not None else None
        if parent_id is not None and (
            find_comment(self.comment_service.comments or (), parent_id) is None
        ):
            raise NotFoundError("Comment", str(request.parent_id))

        comment = await self.comment_service.post_reply(request.text, parent_id)
        return PostReplyResponse(
            ok=comment is not None,
            state=self.comment_service.snapshot(),
            comment=comment,
        )
