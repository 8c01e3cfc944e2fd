"""AniList discussion repository.

Talks to the AniList GraphQL API with a user bearer token.
"""

from typing import Any, Optional

import httpx
import logfire

from discuss.adapter.error import ProviderError
from discuss.domain.error import RemoteOperationError
from discuss.domain.model.comment import CommentNode
from discuss.domain.model.thread import Thread
from discuss.domain.model.user import Viewer
from discuss.domain.repository import DiscussionRepository
from discuss.domain.value import CommentId, MediaId, ThreadId

from .mappers import comment_from_payload, thread_from_payload, viewer_from_payload

_COMMENT_FIELDS = "id, comment, createdAt, likeCount, isLiked, user { name, avatar { large } }"

VIEWER_QUERY = "query { Viewer { name, avatar { large } } }"

THREADS_QUERY = (
    "query ($mediaCategoryId: Int, $perPage: Int) { Page(page: 1, perPage: $perPage) "
    "{ threads(mediaCategoryId: $mediaCategoryId, sort: [REPLY_COUNT_DESC]) "
    "{ id, title, replyCount, siteUrl } } }"
)

THREAD_COMMENTS_QUERY = (
    "query ($threadId: Int, $perPage: Int) { Page(page: 1, perPage: $perPage) "
    f"{{ threadComments(threadId: $threadId, sort: ID) {{ {_COMMENT_FIELDS}, childComments }} }} }}"
)

TOGGLE_LIKE_MUTATION = (
    "mutation ($id: Int, $type: LikeableType) "
    "{ ToggleLikeV2(id: $id, type: $type) { ... on ThreadComment { id } } }"
)

SAVE_COMMENT_MUTATION = (
    "mutation ($threadId: Int!, $parentCommentId: Int, $comment: String) "
    "{ SaveThreadComment(threadId: $threadId, parentCommentId: $parentCommentId, "
    f"comment: $comment) {{ {_COMMENT_FIELDS} }} }}"
)

EDIT_COMMENT_MUTATION = (
    "mutation ($id: Int, $threadId: Int, $comment: String) "
    "{ SaveThreadComment(id: $id, threadId: $threadId, comment: $comment) { id, comment } }"
)

DELETE_COMMENT_MUTATION = (
    "mutation ($id: Int) { DeleteThreadComment(id: $id) { deleted } }"
)


class AniListError(ProviderError, RemoteOperationError):
    """AniList API error."""

    pass


class AniListDiscussionRepository(DiscussionRepository):
    """DiscussionRepository backed by the AniList GraphQL API."""

    def __init__(
        self,
        api_url: str,
        token: str,
        timeout: float = 30.0,
        page_size: int = 50,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize AniList repository.

        Args:
            api_url: GraphQL endpoint
            token: AniList user access token
            timeout: Request timeout in seconds
            page_size: Threads / comments fetched per request
            transport: Optional httpx transport (tests)
        """
        self.api_url = api_url
        self.token = token
        self.timeout = timeout
        self.page_size = page_size
        self._transport = transport

    async def _execute(
        self, operation: str, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its `data` object.

        Raises:
            AniListError: On transport failure, non-200 status or GraphQL errors
        """
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    json={"query": query, "variables": variables or {}},
                    headers={
                        "Authorization": f"Bearer {self.token}",
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                    },
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("AniList HTTP error", operation=operation, error=str(e))
            raise AniListError(f"HTTP error during {operation}: {e}")

        if response.status_code != 200:
            logfire.error(
                "AniList request failed",
                operation=operation,
                status_code=response.status_code,
                error=response.text,
            )
            raise AniListError(f"API returned status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            logfire.error("AniList returned invalid JSON", operation=operation, error=str(e))
            raise AniListError(f"Invalid JSON response during {operation}")
        if not isinstance(result, dict):
            logfire.error("AniList returned unexpected payload", operation=operation)
            raise AniListError(f"Unexpected response during {operation}")

        errors = result.get("errors")
        if errors:
            message = ", ".join(e.get("message", "Unknown error") for e in errors)
            logfire.error("AniList GraphQL errors", operation=operation, error=message)
            raise AniListError(message)

        return result.get("data") or {}

    async def fetch_viewer(self) -> Optional[Viewer]:
        data = await self._execute("viewer", VIEWER_QUERY)
        viewer = data.get("Viewer")
        return viewer_from_payload(viewer) if viewer else None

    async def fetch_threads(self, media_id: MediaId) -> list[Thread]:
        data = await self._execute(
            "threads",
            THREADS_QUERY,
            {"mediaCategoryId": media_id, "perPage": self.page_size},
        )
        page = data.get("Page") or {}
        return [thread_from_payload(t) for t in page.get("threads") or []]

    async def fetch_comments(self, thread_id: ThreadId) -> list[CommentNode]:
        data = await self._execute(
            "thread_comments",
            THREAD_COMMENTS_QUERY,
            {"threadId": thread_id, "perPage": self.page_size},
        )
        page = data.get("Page") or {}
        return [comment_from_payload(c) for c in page.get("threadComments") or []]

    async def toggle_like(self, comment_id: CommentId) -> None:
        await self._execute(
            "toggle_like",
            TOGGLE_LIKE_MUTATION,
            {"id": comment_id, "type": "THREAD_COMMENT"},
        )

    async def save_comment(
        self,
        thread_id: ThreadId,
        text: str,
        parent_id: Optional[CommentId] = None,
    ) -> CommentNode:
        variables: dict[str, Any] = {"threadId": thread_id, "comment": text}
        if parent_id is not None:
            variables["parentCommentId"] = parent_id

        data = await self._execute("save_comment", SAVE_COMMENT_MUTATION, variables)
        saved = data.get("SaveThreadComment")
        if not saved:
            raise AniListError("SaveThreadComment returned no comment")
        return comment_from_payload(saved)

    async def update_comment(
        self, comment_id: CommentId, thread_id: ThreadId, text: str
    ) -> None:
        await self._execute(
            "edit_comment",
            EDIT_COMMENT_MUTATION,
            {"id": comment_id, "threadId": thread_id, "comment": text},
        )

    async def delete_comment(self, comment_id: CommentId) -> bool:
        data = await self._execute(
            "delete_comment", DELETE_COMMENT_MUTATION, {"id": comment_id}
        )
        result = data.get("DeleteThreadComment") or {}
        return bool(result.get("deleted"))
