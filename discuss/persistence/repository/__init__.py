"""Repository implementations."""

from discuss.persistence.repository.inmemory import InMemoryDiscussionRepository

__all__ = [
    "InMemoryDiscussionRepository",
]
