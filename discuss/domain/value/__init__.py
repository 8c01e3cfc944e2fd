"""Domain value objects for discussions."""

from discuss.domain.value.identifiers import CommentId, MediaId, ThreadId
from discuss.domain.value.types import Username

__all__ = [
    # Identifiers
    "CommentId",
    "MediaId",
    "ThreadId",
    # Types
    "Username",
]
