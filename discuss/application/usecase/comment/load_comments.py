"""Load comments use case."""

from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import NotFoundError
from discuss.domain.service import CommentService, ThreadService
from discuss.domain.value import MediaId, ThreadId

from .common import CommentTreeResponse


class LoadCommentsRequest(BaseModel):
    """Load comments request."""

    media_id: int = Field(gt=0)
    thread_id: int = Field(gt=0)


class LoadCommentsUseCase(BaseUseCase):
    """Use case for opening a thread and loading its comment tree."""

    def __init__(
        self, comment_service: CommentService, thread_service: ThreadService
    ) -> None:
        """Initialize load comments use case.

        Args:
            comment_service: Comment domain service
            thread_service: Thread domain service
        """
        self.comment_service = comment_service
        self.thread_service = thread_service

    async def execute(self, request: LoadCommentsRequest) -> CommentTreeResponse:
        """Execute load comments flow.

        The viewer is fetched alongside, so replies can be posted afterwards.

        Raises:
            NotFoundError: If the thread does not belong to the media entry
        """
        media_id = MediaId(request.media_id)
        thread_id = ThreadId(request.thread_id)

        # 1. Resolve the thread from the media entry's listing
        await self.thread_service.list_threads(media_id)
        thread = self.thread_service.find_thread(media_id, thread_id)
        if thread is None:
            raise NotFoundError("Thread", str(request.thread_id))

        # 2. Viewer first, then comments
        await self.comment_service.load_viewer()
        comments = await self.comment_service.load_comments(thread)

        return CommentTreeResponse(
            ok=comments is not None, state=self.comment_service.snapshot()
        )
