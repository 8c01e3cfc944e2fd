"""Delete comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId

from .common import CommentTreeResponse, require_own_comment, require_thread


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting one's own comment with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> CommentTreeResponse:
        """Execute delete comment flow.

        Raises:
            ValueError: If no thread is open
            NotFoundError: If the comment is not in the tree
            NotAuthorizedError: If the viewer did not write the comment
        """
        require_thread(self.comment_service)
        comment_id = CommentId(request.comment_id)
        require_own_comment(self.comment_service, comment_id)

        ok = await self.comment_service.delete_comment(comment_id)
        return CommentTreeResponse(ok=ok, state=self.comment_service.snapshot())
