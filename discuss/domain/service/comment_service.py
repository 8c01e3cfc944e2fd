"""Comment domain service.

Owns the comment forest of the selected thread and applies user actions to
it optimistically: the local change happens synchronously, before the first
`await`, and the remote confirmation (or rollback) is applied by comment id
whenever the backend answers. Confirmations may arrive in any order.
"""

import time
from collections.abc import Callable

import logfire

from discuss.domain.model.comment import CommentForest, CommentNode
from discuss.domain.model.common import DomainModel
from discuss.domain.model.thread import Thread
from discuss.domain.model.user import Viewer
from discuss.domain.repository import DiscussionRepository
from discuss.domain.service.comment_tree import (
    append_reply,
    find_comment,
    prepend_comment,
    remove_comment,
    replace_comment,
    set_text_in_tree,
    toggle_like_in_tree,
)
from discuss.domain.service.markup.entities import normalize_line_breaks
from discuss.domain.value import CommentId, ThreadId

from .base import Service

VIEWER_MISSING_MESSAGE = "Cannot post reply, user data not loaded."
REPLY_FAILED_MESSAGE = "Failed to send reply."
EDIT_FAILED_MESSAGE = "Failed to edit comment."
DELETE_FAILED_MESSAGE = "Failed to delete comment. Please refresh."


class CommentTreeState(DomainModel):
    """Read-only snapshot of the comment view for renderers."""

    thread_id: ThreadId | None
    comments: CommentForest | None  # None until loaded
    error: str | None
    is_loading: bool
    is_submitting: bool
    replying_to_comment_id: CommentId | None
    is_replying_to_thread: bool
    editing_comment_id: CommentId | None
    deleting_comment_id: CommentId | None


class PlaceholderIdGenerator:
    """Session-unique ids for replies the backend has not confirmed yet.

    Ids are wall-clock milliseconds, bumped when the clock has not moved
    since the previous id, so no id is handed out twice.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def next_id(self) -> CommentId:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return CommentId(candidate)


class CommentService(Service):
    """Domain service for the optimistic comment tree.

    Submissions (reply, edit, delete) share one busy flag: while one is in
    flight, further submissions are ignored. Like toggles are not gated.
    """

    def __init__(
        self,
        discussion_repository: DiscussionRepository,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize comment service.

        Args:
            discussion_repository: Remote discussion backend
            clock: Wall clock in unix seconds (placeholder ids, timestamps)
        """
        self.discussion_repository = discussion_repository
        self._clock = clock
        self._placeholder_ids = PlaceholderIdGenerator(clock)

        self.viewer: Viewer | None = None
        self.thread: Thread | None = None
        self.comments: CommentForest | None = None
        self.error: str | None = None
        self.is_loading = False
        self.is_submitting = False

        self.replying_to_comment_id: CommentId | None = None
        self.is_replying_to_thread = False
        self.editing_comment_id: CommentId | None = None
        self.deleting_comment_id: CommentId | None = None

    # --- Loading ---

    async def load_viewer(self) -> Viewer | None:
        """Fetch the signed-in user once per session.

        Failures are logged only; without a viewer replies are refused.
        """
        if self.viewer is not None:
            return self.viewer
        with logfire.span("comment_service.load_viewer"):
            try:
                self.viewer = await self.discussion_repository.fetch_viewer()
            except Exception as e:
                logfire.error("Failed to fetch viewer info", error=str(e))
            return self.viewer

    async def load_comments(self, thread: Thread) -> CommentForest | None:
        """Select a thread and fetch its comments.

        Args:
            thread: Thread to open

        Returns:
            The loaded forest, or None if the fetch failed
        """
        with logfire.span("comment_service.load_comments", thread_id=thread.id):
            self.select_thread(thread)
            self.is_loading = True
            try:
                fetched = await self.discussion_repository.fetch_comments(thread.id)
            except Exception as e:
                logfire.error(
                    "Failed to fetch comments", thread_id=thread.id, error=str(e)
                )
                if self._is_current(thread.id):
                    self.error = str(e)
                return None
            finally:
                if self._is_current(thread.id):
                    self.is_loading = False

            if not self._is_current(thread.id):
                logfire.info("Discarding comments of a closed thread", thread_id=thread.id)
                return None

            self.comments = tuple(fetched)
            logfire.info(
                "Comments loaded", thread_id=thread.id, count=len(self.comments)
            )
            return self.comments

    # --- Mutations ---

    async def toggle_like(self, comment_id: CommentId) -> None:
        """Like or unlike a comment at any depth.

        The local flip is never rolled back; a failed remote call is logged.
        """
        with logfire.span("comment_service.toggle_like", comment_id=comment_id):
            self.comments = toggle_like_in_tree(self._forest(), comment_id)
            try:
                await self.discussion_repository.toggle_like(comment_id)
            except Exception as e:
                logfire.warn("Like mutation failed", comment_id=comment_id, error=str(e))

    async def post_reply(
        self, text: str, parent_id: CommentId | None = None
    ) -> CommentNode | None:
        """Post a top-level comment or a reply.

        A placeholder node shows up immediately (first among top-level
        comments, or last among the parent's replies) and is swapped for the
        persisted comment on success or removed on failure.

        Args:
            text: Comment text
            parent_id: Comment being replied to (None for a top-level comment)

        Returns:
            The persisted comment, or None if nothing was posted
        """
        thread = self.thread
        if thread is None or not text.strip() or self.is_submitting:
            return None
        if parent_id is not None and find_comment(self._forest(), parent_id) is None:
            logfire.warn("Reply parent not found", thread_id=thread.id, parent_id=parent_id)
            return None

        self.is_submitting = True
        self.error = None

        viewer = self.viewer
        if viewer is None:
            self.error = VIEWER_MISSING_MESSAGE
            self.is_submitting = False
            return None

        placeholder = CommentNode(
            id=self._placeholder_ids.next_id(),
            author_name=viewer.name.root,
            author_avatar=viewer.avatar,
            raw_text=text,
            created_at=int(self._clock()),
            is_optimistic=True,
        )
        if parent_id is None:
            self.comments = prepend_comment(self._forest(), placeholder)
        else:
            self.comments = append_reply(self._forest(), parent_id, placeholder)

        with logfire.span(
            "comment_service.post_reply",
            thread_id=thread.id,
            parent_id=parent_id,
            placeholder_id=placeholder.id,
        ):
            try:
                saved = await self.discussion_repository.save_comment(
                    thread.id, text, parent_id
                )
            except Exception as e:
                logfire.error(
                    "Reply failed, removing placeholder",
                    placeholder_id=placeholder.id,
                    error=str(e),
                )
                self.error = REPLY_FAILED_MESSAGE
                self._apply(thread.id, lambda f: remove_comment(f, placeholder.id))
                return None
            else:
                confirmed = saved.model_copy(
                    update={"children": (), "is_optimistic": False}
                )
                self._apply(
                    thread.id, lambda f: replace_comment(f, placeholder.id, confirmed)
                )
                logfire.info(
                    "Reply confirmed",
                    placeholder_id=placeholder.id,
                    comment_id=confirmed.id,
                )
                return confirmed
            finally:
                self.is_submitting = False
                self.replying_to_comment_id = None
                self.is_replying_to_thread = False

    async def edit_comment(self, comment_id: CommentId, text: str) -> bool:
        """Change the text of a comment, restoring the old text on failure.

        Args:
            comment_id: Comment to edit
            text: New text

        Returns:
            True if the backend accepted the edit
        """
        thread = self.thread
        if thread is None or not text.strip() or self.is_submitting:
            return False

        self.is_submitting = True
        self.error = None

        original = find_comment(self._forest(), comment_id)
        self.comments = set_text_in_tree(self._forest(), comment_id, text)
        self.editing_comment_id = None

        with logfire.span(
            "comment_service.edit_comment", comment_id=comment_id, text_length=len(text)
        ):
            try:
                await self.discussion_repository.update_comment(
                    comment_id, thread.id, text
                )
            except Exception as e:
                logfire.error(
                    "Edit failed, restoring previous text",
                    comment_id=comment_id,
                    error=str(e),
                )
                self.error = EDIT_FAILED_MESSAGE
                if original is not None:
                    previous_text = original.raw_text
                    self._apply(
                        thread.id,
                        lambda f: set_text_in_tree(f, comment_id, previous_text),
                    )
                return False
            finally:
                self.is_submitting = False

            logfire.info("Comment edited", comment_id=comment_id)
            return True

    async def delete_comment(self, comment_id: CommentId) -> bool:
        """Delete a comment and its replies.

        The subtree is not restored if the backend refuses; the user is told
        to refresh instead.

        Returns:
            True if the backend confirmed the deletion
        """
        if self.is_submitting:
            return False

        self.is_submitting = True
        self.error = None

        self.comments = remove_comment(self._forest(), comment_id)
        self.deleting_comment_id = None

        with logfire.span("comment_service.delete_comment", comment_id=comment_id):
            try:
                deleted = await self.discussion_repository.delete_comment(comment_id)
            except Exception as e:
                logfire.error("Delete failed", comment_id=comment_id, error=str(e))
                deleted = False
            finally:
                self.is_submitting = False

            if not deleted:
                self.error = DELETE_FAILED_MESSAGE
                return False

            logfire.info("Comment deleted", comment_id=comment_id)
            return True

    # --- View intents ---

    def select_thread(self, thread: Thread) -> None:
        """Open a thread, dropping the state of the previous one."""
        self.reset()
        self.thread = thread

    def reset(self) -> None:
        """Close the thread and clear all per-thread state."""
        self.thread = None
        self.comments = None
        self.error = None
        self.is_loading = False
        self._clear_intents()

    def begin_reply(self, comment_id: CommentId) -> None:
        self._clear_intents()
        self.replying_to_comment_id = comment_id

    def begin_thread_reply(self) -> None:
        self._clear_intents()
        self.is_replying_to_thread = True

    def begin_edit(self, comment_id: CommentId) -> str | None:
        """Enter edit mode for a comment.

        Returns:
            The comment text to prefill the editor with, or None if the
            comment is not in the tree
        """
        self._clear_intents()
        node = find_comment(self._forest(), comment_id)
        if node is None:
            return None
        self.editing_comment_id = comment_id
        return normalize_line_breaks(node.raw_text)

    def begin_delete(self, comment_id: CommentId) -> None:
        self._clear_intents()
        self.deleting_comment_id = comment_id

    def cancel_reply(self) -> None:
        self.replying_to_comment_id = None
        self.is_replying_to_thread = False

    def cancel_edit(self) -> None:
        self.editing_comment_id = None

    def cancel_delete(self) -> None:
        self.deleting_comment_id = None

    def can_modify(self, comment: CommentNode) -> bool:
        """Only the author may edit or delete a comment."""
        return self.viewer is not None and self.viewer.owns(comment.author_name)

    def snapshot(self) -> CommentTreeState:
        """Capture the current state for rendering."""
        return CommentTreeState(
            thread_id=self.thread.id if self.thread else None,
            comments=self.comments,
            error=self.error,
            is_loading=self.is_loading,
            is_submitting=self.is_submitting,
            replying_to_comment_id=self.replying_to_comment_id,
            is_replying_to_thread=self.is_replying_to_thread,
            editing_comment_id=self.editing_comment_id,
            deleting_comment_id=self.deleting_comment_id,
        )

    # --- Helpers ---

    def _forest(self) -> CommentForest:
        return self.comments if self.comments is not None else ()

    def _is_current(self, thread_id: ThreadId) -> bool:
        return self.thread is not None and self.thread.id == thread_id

    def _apply(
        self, thread_id: ThreadId, change: Callable[[CommentForest], CommentForest]
    ) -> None:
        # Late confirmations for a thread that was closed meanwhile are dropped
        if self._is_current(thread_id):
            self.comments = change(self._forest())

    def _clear_intents(self) -> None:
        self.replying_to_comment_id = None
        self.is_replying_to_thread = False
        self.editing_comment_id = None
        self.deleting_comment_id = None
