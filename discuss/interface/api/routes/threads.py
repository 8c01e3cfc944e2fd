"""Thread routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from discuss.application.usecase.comment import (
    CommentTreeResponse,
    LoadCommentsRequest,
    LoadCommentsUseCase,
)
from discuss.application.usecase.thread import (
    ListThreadsRequest,
    ListThreadsResponse,
    ListThreadsUseCase,
)
from discuss.domain.error import NotFoundError, RemoteOperationError

router = APIRouter(tags=["threads"], route_class=DishkaRoute)


class LoadThreadAPIRequest(BaseModel):
    """API request for opening a thread."""

    media_id: int = Field(gt=0)


@router.get("/media/{media_id}/threads", response_model=ListThreadsResponse)
async def list_threads(
    media_id: int,
    use_case: FromDishka[ListThreadsUseCase],
    refresh: bool = False,
) -> ListThreadsResponse:
    """List the discussion threads of a media entry.

    Args:
        media_id: Media entry id
        use_case: List threads use case (injected)
        refresh: Bypass the session cache

    Raises:
        HTTPException: 400 on invalid input, 502 if the backend fails
    """
    try:
        request = ListThreadsRequest(media_id=media_id, refresh=refresh)
        return await use_case.execute(request)
    except RemoteOperationError as e:
        logfire.warn("Thread listing failed", media_id=media_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/threads/{thread_id}/load", response_model=CommentTreeResponse)
async def load_thread(
    thread_id: int,
    request: LoadThreadAPIRequest,
    use_case: FromDishka[LoadCommentsUseCase],
) -> CommentTreeResponse:
    """Open a thread and load its comments.

    A failed comment fetch is reported in `state.error` with `ok` false.

    Raises:
        HTTPException: 404 if the thread is unknown, 502 if listing fails
    """
    try:
        use_case_request = LoadCommentsRequest(
            media_id=request.media_id, thread_id=thread_id
        )
        return await use_case.execute(use_case_request)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RemoteOperationError as e:
        logfire.warn("Thread listing failed", thread_id=thread_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
