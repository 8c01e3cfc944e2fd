"""Domain model entities for discussions."""

from discuss.domain.model.comment import CommentForest, CommentNode
from discuss.domain.model.thread import Thread
from discuss.domain.model.user import Viewer

__all__ = [
    "CommentForest",
    "CommentNode",
    "Thread",
    "Viewer",
]
