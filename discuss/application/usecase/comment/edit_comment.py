"""Edit comment use case."""

from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId

from .common import CommentTreeResponse, require_own_comment, require_thread


class EditCommentRequest(BaseModel):
    """Edit comment request."""

    comment_id: int
    text: str = Field(min_length=1)


class EditCommentUseCase(BaseUseCase):
    """Use case for editing the text of one's own comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: EditCommentRequest) -> CommentTreeResponse:
        """Execute edit comment flow.

        Raises:
            ValueError: If no thread is open or the text is blank
            NotFoundError: If the comment is not in the tree
            NotAuthorizedError: If the viewer did not write the comment
        """
        require_thread(self.comment_service)
        if not request.text.strip():
            raise ValueError("Comment text cannot be empty")

        comment_id = CommentId(request.comment_id)
        require_own_comment(self.comment_service, comment_id)

        ok = await self.comment_service.edit_comment(comment_id, request.text)
        return CommentTreeResponse(ok=ok, state=self.comment_service.snapshot())
