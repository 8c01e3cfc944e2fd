"""List threads use case."""

from pydantic import BaseModel, Field

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.model.thread import Thread
from discuss.domain.service import ThreadService
from discuss.domain.value import MediaId


class ListThreadsRequest(BaseModel):
    """List threads request."""

    media_id: int = Field(gt=0)
    refresh: bool = False


class ListThreadsResponse(BaseModel):
    """List threads response.

    Episode threads come first, ordered by episode number.
    """

    media_id: int
    episodes: list[Thread]
    general: list[Thread]


class ListThreadsUseCase(BaseUseCase):
    """Use case for listing the discussion threads of a media entry."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize list threads use case.

        Args:
            thread_service: Thread domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: ListThreadsRequest) -> ListThreadsResponse:
        """Execute list threads flow.

        Raises:
            RemoteOperationError: If the backend request fails
        """
        listing = await self.thread_service.list_threads(
            MediaId(request.media_id), refresh=request.refresh
        )
        return ListThreadsResponse(
            media_id=request.media_id,
            episodes=list(listing.episodes),
            general=list(listing.general),
        )
