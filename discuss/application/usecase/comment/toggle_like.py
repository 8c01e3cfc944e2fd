"""Toggle like use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import NotFoundError
from discuss.domain.service import CommentService
from discuss.domain.service.comment_tree import find_comment
from discuss.domain.value import CommentId

from .common import CommentTreeResponse, require_thread


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: int


class ToggleLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize toggle like use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ToggleLikeRequest) -> CommentTreeResponse:
        """Execute toggle like flow.

        A failed remote call does not undo the local toggle.

        Raises:
            ValueError: If no thread is open
            NotFoundError: If the comment is not in the tree
        """
        require_thread(self.comment_service)
        comment_id = CommentId(request.comment_id)
        if find_comment(self.comment_service.comments or (), comment_id) is None:
            raise NotFoundError("Comment", str(request.comment_id))

        await self.comment_service.toggle_like(comment_id)
        return CommentTreeResponse(ok=True, state=self.comment_service.snapshot())
