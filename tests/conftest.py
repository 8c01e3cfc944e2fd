"""Test configuration and fixtures."""

from discuss.domain.model.comment import CommentNode
from discuss.domain.model.thread import Thread
from discuss.domain.value import CommentId, ThreadId


def make_comment(
    comment_id: int,
    text: str = "comment",
    author: str = "someone",
    like_count: int = 0,
    is_liked: bool = False,
    children: tuple[CommentNode, ...] = (),
    created_at: int = 1_700_000_000,
) -> CommentNode:
    """Helper function to build comment nodes for tests."""
    return CommentNode(
        id=CommentId(comment_id),
        author_name=author,
        raw_text=text,
        created_at=created_at,
        like_count=like_count,
        is_liked=is_liked,
        children=children,
    )


def make_thread(thread_id: int, title: str = "General Discussion", reply_count: int = 0) -> Thread:
    """Helper function to build threads for tests."""
    return Thread(id=ThreadId(thread_id), title=title, reply_count=reply_count)
