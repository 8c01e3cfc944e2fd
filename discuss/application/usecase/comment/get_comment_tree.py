"""Get comment tree use case."""

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import CommentService

from .common import CommentTreeResponse


class GetCommentTreeUseCase(BaseUseCase):
    """Use case for reading the current comment tree state."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: None = None) -> CommentTreeResponse:
        return CommentTreeResponse(ok=True, state=self.comment_service.snapshot())
