"""Discussion repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from discuss.domain.model.comment import CommentNode
from discuss.domain.model.thread import Thread
from discuss.domain.model.user import Viewer
from discuss.domain.value import CommentId, MediaId, ThreadId


class DiscussionRepository(ABC):
    """Repository for threads, comments and likes.

    Defines the contract for the remote discussion backend. Every call
    either returns its payload or raises; the transport is up to the
    implementation.
    """

    @abstractmethod
    async def fetch_viewer(self) -> Optional[Viewer]:
        """Fetch the signed-in user.

        Returns:
            The viewer, or None when the backend reports no signed-in user
        """
        pass

    @abstractmethod
    async def fetch_threads(self, media_id: MediaId) -> List[Thread]:
        """Fetch the discussion threads of a media entry.

        Args:
            media_id: The media entry

        Returns:
            Threads, most replied first
        """
        pass

    @abstractmethod
    async def fetch_comments(self, thread_id: ThreadId) -> List[CommentNode]:
        """Fetch the top-level comments of a thread with their replies.

        Args:
            thread_id: The thread

        Returns:
            Top-level comments, each with its nested replies
        """
        pass

    @abstractmethod
    async def toggle_like(self, comment_id: CommentId) -> None:
        """Persist a like toggle on a comment.

        Args:
            comment_id: The comment liked or unliked
        """
        pass

    @abstractmethod
    async def save_comment(
        self,
        thread_id: ThreadId,
        text: str,
        parent_id: Optional[CommentId] = None,
    ) -> CommentNode:
        """Create a comment in a thread, optionally as a reply.

        Args:
            thread_id: The thread the comment belongs to
            text: Comment text
            parent_id: Comment being replied to (None for top-level)

        Returns:
            The persisted comment with its canonical id
        """
        pass

    @abstractmethod
    async def update_comment(
        self, comment_id: CommentId, thread_id: ThreadId, text: str
    ) -> None:
        """Replace the text of an existing comment.

        Args:
            comment_id: The comment to edit
            thread_id: The thread the comment belongs to
            text: New comment text
        """
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: CommentId) -> bool:
        """Delete a comment and its replies.

        Args:
            comment_id: The comment to delete

        Returns:
            True if the backend reports the comment deleted
        """
        pass
