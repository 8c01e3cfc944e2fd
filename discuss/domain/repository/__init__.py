"""Domain repository interfaces."""

from discuss.domain.repository.discussion import DiscussionRepository

__all__ = [
    "DiscussionRepository",
]
