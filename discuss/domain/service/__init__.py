"""Domain services."""

from .base import Service
from .comment_service import CommentService, CommentTreeState, PlaceholderIdGenerator
from .markup_service import MarkupService
from .thread_service import ThreadListing, ThreadService, format_time_ago

__all__ = [
    "CommentService",
    "CommentTreeState",
    "MarkupService",
    "PlaceholderIdGenerator",
    "Service",
    "ThreadListing",
    "ThreadService",
    "format_time_ago",
]
