"""Comment use cases."""

from .common import CommentTreeResponse
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .edit_comment import EditCommentRequest, EditCommentUseCase
from .get_comment_tree import GetCommentTreeUseCase
from .load_comments import LoadCommentsRequest, LoadCommentsUseCase
from .post_reply import PostReplyRequest, PostReplyResponse, PostReplyUseCase
from .toggle_like import ToggleLikeRequest, ToggleLikeUseCase

__all__ = [
    "CommentTreeResponse",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "EditCommentRequest",
    "EditCommentUseCase",
    "GetCommentTreeUseCase",
    "LoadCommentsRequest",
    "LoadCommentsUseCase",
    "PostReplyRequest",
    "PostReplyResponse",
    "PostReplyUseCase",
    "ToggleLikeRequest",
    "ToggleLikeUseCase",
]
