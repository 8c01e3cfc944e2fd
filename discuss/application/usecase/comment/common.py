"""Shared comment use case models and checks."""

from pydantic import BaseModel

from discuss.domain.error import NotAuthorizedError, NotFoundError
from discuss.domain.model.comment import CommentNode
from discuss.domain.service import CommentService, CommentTreeState
from discuss.domain.service.comment_tree import find_comment
from discuss.domain.value import CommentId


class CommentTreeResponse(BaseModel):
    """Outcome of a comment action plus the resulting tree state."""

    ok: bool
    state: CommentTreeState


def require_thread(comment_service: CommentService) -> None:
    if comment_service.thread is None:
        raise ValueError("No thread selected")


def require_own_comment(
    comment_service: CommentService, comment_id: CommentId
) -> CommentNode:
    """Find a comment of the open thread that the viewer may modify.

    Raises:
        NotFoundError: If the comment is not in the tree
        NotAuthorizedError: If the viewer is not its author
    """
    comment = find_comment(comment_service.comments or (), comment_id)
    if comment is None:
        raise NotFoundError("Comment", str(comment_id))
    if not comment_service.can_modify(comment):
        viewer = comment_service.viewer
        raise NotAuthorizedError(
            "comment", str(comment_id), viewer.name.root if viewer else "anonymous"
        )
    return comment
