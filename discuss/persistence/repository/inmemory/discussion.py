"""In-memory discussion repository for testing."""

import asyncio
import time
from collections.abc import Callable
from typing import Optional

from discuss.domain.error import NotFoundError, RemoteOperationError
from discuss.domain.model.comment import CommentForest, CommentNode
from discuss.domain.model.thread import Thread
from discuss.domain.model.user import Viewer
from discuss.domain.repository import DiscussionRepository
from discuss.domain.service.comment_tree import (
    append_reply,
    find_comment,
    remove_comment,
    set_text_in_tree,
    toggle_like_in_tree,
)
from discuss.domain.value import CommentId, MediaId, ThreadId


class InMemoryDiscussionRepository(DiscussionRepository):
    """In-memory implementation of DiscussionRepository for testing.

    Besides storing data it can be told to fail an operation (`fail`) or to
    hold an operation open until the test releases it (`hold`), which makes
    slow and out-of-order backend answers reproducible.
    """

    def __init__(
        self,
        viewer: Optional[Viewer] = None,
        clock: Callable[[], float] = time.time,
        first_comment_id: int = 1000,
    ) -> None:
        self.viewer = viewer
        self._clock = clock
        self._next_id = first_comment_id
        self._threads: dict[MediaId, list[Thread]] = {}
        self._comments: dict[ThreadId, CommentForest] = {}

        self.failures: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}
        self.delete_result: bool = True
        self.calls: list[tuple] = []

    # --- Test controls ---

    def add_thread(self, media_id: MediaId, thread: Thread) -> Thread:
        self._threads.setdefault(media_id, []).append(thread)
        self._comments.setdefault(thread.id, ())
        return thread

    def add_comments(self, thread_id: ThreadId, *comments: CommentNode) -> None:
        self._comments[thread_id] = (*self._comments.get(thread_id, ()), *comments)

    def stored_comments(self, thread_id: ThreadId) -> CommentForest:
        return self._comments.get(thread_id, ())

    def fail(self, operation: str) -> None:
        """Make every subsequent call of `operation` raise."""
        self.failures.add(operation)

    def recover(self, operation: str) -> None:
        self.failures.discard(operation)

    def hold(self, operation: str) -> asyncio.Event:
        """Block calls of `operation` until the returned event is set."""
        gate = asyncio.Event()
        self.gates[operation] = gate
        return gate

    async def _enter(self, operation: str, *args) -> None:
        self.calls.append((operation, *args))
        gate = self.gates.get(operation)
        if gate is not None:
            await gate.wait()
        if operation in self.failures:
            raise RemoteOperationError(f"{operation} failed")

    def _thread_of(self, comment_id: CommentId) -> ThreadId:
        for thread_id, forest in self._comments.items():
            if find_comment(forest, comment_id) is not None:
                return thread_id
        raise NotFoundError("Comment", str(comment_id))

    # --- DiscussionRepository ---

    async def fetch_viewer(self) -> Optional[Viewer]:
        await self._enter("fetch_viewer")
        return self.viewer

    async def fetch_threads(self, media_id: MediaId) -> list[Thread]:
        await self._enter("fetch_threads", media_id)
        return sorted(
            self._threads.get(media_id, []), key=lambda t: t.reply_count, reverse=True
        )

    async def fetch_comments(self, thread_id: ThreadId) -> list[CommentNode]:
        await self._enter("fetch_comments", thread_id)
        return list(self._comments.get(thread_id, ()))

    async def toggle_like(self, comment_id: CommentId) -> None:
        await self._enter("toggle_like", comment_id)
        thread_id = self._thread_of(comment_id)
        self._comments[thread_id] = toggle_like_in_tree(
            self._comments[thread_id], comment_id
        )

    async def save_comment(
        self,
        thread_id: ThreadId,
        text: str,
        parent_id: Optional[CommentId] = None,
    ) -> CommentNode:
        await self._enter("save_comment", thread_id, text, parent_id)
        if self.viewer is None:
            raise RemoteOperationError("Not signed in")

        comment = CommentNode(
            id=CommentId(self._next_id),
            author_name=self.viewer.name.root,
            author_avatar=self.viewer.avatar,
            raw_text=text,
            created_at=int(self._clock()),
        )
        self._next_id += 1

        forest = self._comments.get(thread_id, ())
        if parent_id is None:
            self._comments[thread_id] = (*forest, comment)
        else:
            if find_comment(forest, parent_id) is None:
                raise NotFoundError("Comment", str(parent_id))
            self._comments[thread_id] = append_reply(forest, parent_id, comment)
        return comment

    async def update_comment(
        self, comment_id: CommentId, thread_id: ThreadId, text: str
    ) -> None:
        await self._enter("update_comment", comment_id, thread_id, text)
        forest = self._comments.get(thread_id, ())
        if find_comment(forest, comment_id) is None:
            raise NotFoundError("Comment", str(comment_id))
        self._comments[thread_id] = set_text_in_tree(forest, comment_id, text)

    async def delete_comment(self, comment_id: CommentId) -> bool:
        await self._enter("delete_comment", comment_id)
        if not self.delete_result:
            return False
        thread_id = self._thread_of(comment_id)
        self._comments[thread_id] = remove_comment(self._comments[thread_id], comment_id)
        return True
