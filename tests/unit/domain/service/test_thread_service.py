"""Unit tests for ThreadService."""

import pytest

from discuss.domain.error import RemoteOperationError
from discuss.domain.repository import DiscussionRepository
from discuss.domain.service import ThreadService, format_time_ago
from discuss.domain.value import MediaId, ThreadId
from tests.conftest import make_thread
from tests.harness import create_env_fixture

# Unit test fixture - in-memory discussion backend
unit_env = create_env_fixture()

NOW = 1_700_000_000


class TestListThreads:
    """Tests for list_threads method."""

    @pytest.mark.asyncio
    async def test_splits_episode_and_general_threads(self, unit_env):
        """Episode threads should be sorted by episode number, general ones kept in order."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        repo = await unit_env.get(DiscussionRepository)
        repo.add_thread(MediaId(1), make_thread(10, "Episode 2 Discussion", reply_count=50))
        repo.add_thread(MediaId(1), make_thread(11, "Season Discussion", reply_count=40))
        repo.add_thread(MediaId(1), make_thread(12, "Episode 10 Discussion", reply_count=30))
        repo.add_thread(MediaId(1), make_thread(13, "Episode 1 Discussion", reply_count=20))
        repo.add_thread(MediaId(1), make_thread(14, "Manga spoilers", reply_count=10))

        # Act
        listing = await thread_service.list_threads(MediaId(1))

        # Assert
        assert [t.id for t in listing.episodes] == [13, 10, 12]
        assert [t.id for t in listing.general] == [11, 14]
        assert listing.is_empty is False

    @pytest.mark.asyncio
    async def test_no_threads(self, unit_env):
        """A media entry without threads should give an empty listing."""
        thread_service = await unit_env.get(ThreadService)

        listing = await thread_service.list_threads(MediaId(404))

        assert listing.is_empty is True

    @pytest.mark.asyncio
    async def test_listing_is_cached(self, unit_env):
        """A second call should be served from the cache unless refreshed."""
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        repo = await unit_env.get(DiscussionRepository)
        repo.add_thread(MediaId(1), make_thread(10))

        # Act
        first = await thread_service.list_threads(MediaId(1))
        repo.add_thread(MediaId(1), make_thread(11))
        cached = await thread_service.list_threads(MediaId(1))
        refreshed = await thread_service.list_threads(MediaId(1), refresh=True)

        # Assert
        assert cached is first
        assert [t.id for t in refreshed.general] == [10, 11]
        assert [c[0] for c in repo.calls].count("fetch_threads") == 2

    @pytest.mark.asyncio
    async def test_backend_failure_propagates(self, unit_env):
        """Backend errors should reach the caller and not be cached."""
        thread_service = await unit_env.get(ThreadService)
        repo = await unit_env.get(DiscussionRepository)
        repo.fail("fetch_threads")

        with pytest.raises(RemoteOperationError):
            await thread_service.list_threads(MediaId(1))

        repo.recover("fetch_threads")
        assert (await thread_service.list_threads(MediaId(1))).is_empty

    @pytest.mark.asyncio
    async def test_find_thread(self, unit_env):
        """Threads should be found in the cached listing only."""
        thread_service = await unit_env.get(ThreadService)
        repo = await unit_env.get(DiscussionRepository)
        repo.add_thread(MediaId(1), make_thread(10, "Episode 3"))

        assert thread_service.find_thread(MediaId(1), ThreadId(10)) is None
        await thread_service.list_threads(MediaId(1))
        assert thread_service.find_thread(MediaId(1), ThreadId(10)).title == "Episode 3"
        assert thread_service.find_thread(MediaId(1), ThreadId(99)) is None

    @pytest.mark.asyncio
    async def test_clear_cache(self, unit_env):
        """Clearing the cache should force the next listing to refetch."""
        thread_service = await unit_env.get(ThreadService)
        repo = await unit_env.get(DiscussionRepository)
        await thread_service.list_threads(MediaId(1))

        thread_service.clear_cache()
        await thread_service.list_threads(MediaId(1))

        assert [c[0] for c in repo.calls].count("fetch_threads") == 2


class TestFormatTimeAgo:
    """Tests for relative timestamps."""

    def test_just_now(self):
        assert format_time_ago(NOW - 29, NOW) == "just now"

    def test_seconds(self):
        assert format_time_ago(NOW - 45, NOW) == "45s ago"

    def test_exactly_one_unit_stays_in_smaller_unit(self):
        """A unit is only used once more than one of it has passed."""
        assert format_time_ago(NOW - 60, NOW) == "60s ago"
        assert format_time_ago(NOW - 3600, NOW) == "60m ago"

    def test_minutes_and_hours(self):
        assert format_time_ago(NOW - 150, NOW) == "2m ago"
        assert format_time_ago(NOW - 3 * 3600 - 5, NOW) == "3h ago"

    def test_days_months_years(self):
        assert format_time_ago(NOW - 5 * 86400, NOW) == "5d ago"
        assert format_time_ago(NOW - 70 * 86400, NOW) == "2mo ago"
        assert format_time_ago(NOW - 800 * 86400, NOW) == "2y ago"
