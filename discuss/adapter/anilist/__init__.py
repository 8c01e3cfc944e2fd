"""AniList GraphQL adapter."""

from .client import AniListDiscussionRepository, AniListError

__all__ = ["AniListDiscussionRepository", "AniListError"]
