"""Thread domain service."""

import logfire

from discuss.domain.model.thread import Thread
from discuss.domain.repository import DiscussionRepository
from discuss.domain.value import MediaId, ThreadId
from discuss.domain.value.common import ValueObject

from .base import Service

# (seconds per unit, suffix), largest first
_TIME_UNITS = (
    (31536000, "y"),
    (2592000, "mo"),
    (86400, "d"),
    (3600, "h"),
    (60, "m"),
)


def format_time_ago(created_at: int, now: float) -> str:
    """Render a unix timestamp relative to `now` (both in seconds).

    Examples: "just now", "45s ago", "3h ago", "2mo ago".
    """
    seconds = int(now - created_at)
    if seconds < 30:
        return "just now"
    for unit, suffix in _TIME_UNITS:
        # A unit is used only once strictly more than one of it has passed
        if seconds / unit > 1:
            return f"{seconds // unit}{suffix} ago"
    return f"{seconds}s ago"


class ThreadListing(ValueObject):
    """Threads of one media entry, split for display."""

    episodes: tuple[Thread, ...] = ()
    general: tuple[Thread, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.episodes and not self.general


class ThreadService(Service):
    """Domain service for discussion threads.

    Thread lists are fetched once per media entry and cached for the
    session.
    """

    def __init__(self, discussion_repository: DiscussionRepository) -> None:
        self.discussion_repository = discussion_repository
        self._cache: dict[MediaId, ThreadListing] = {}

    async def list_threads(
        self, media_id: MediaId, refresh: bool = False
    ) -> ThreadListing:
        """Get the threads of a media entry.

        Args:
            media_id: Media entry the threads belong to
            refresh: Bypass the cache

        Returns:
            Episode threads ordered by episode number, then the general
            threads in the order the backend returned them

        Raises:
            RemoteOperationError: If the backend request fails
        """
        if not refresh and media_id in self._cache:
            return self._cache[media_id]

        with logfire.span("thread_service.list_threads", media_id=media_id):
            threads = await self.discussion_repository.fetch_threads(media_id)
            listing = ThreadListing(
                episodes=tuple(
                    sorted(
                        (t for t in threads if t.is_episode),
                        key=lambda t: t.episode_number,
                    )
                ),
                general=tuple(t for t in threads if not t.is_episode),
            )
            self._cache[media_id] = listing
            logfire.info(
                "Threads loaded",
                media_id=media_id,
                episodes=len(listing.episodes),
                general=len(listing.general),
            )
            return listing

    def find_thread(self, media_id: MediaId, thread_id: ThreadId) -> Thread | None:
        """Look up a thread among the cached listing of a media entry."""
        listing = self._cache.get(media_id)
        if listing is None:
            return None
        return next(
            (t for t in (*listing.episodes, *listing.general) if t.id == thread_id),
            None,
        )

    def clear_cache(self) -> None:
        self._cache.clear()
