"""In-memory repository implementations for testing and offline use."""

from .discussion import InMemoryDiscussionRepository

__all__ = [
    "InMemoryDiscussionRepository",
]
