"""Unit tests for CommentService, the optimistic comment tree."""

import asyncio

import pytest

from discuss.domain.model.user import Viewer
from discuss.domain.service.comment_service import (
    DELETE_FAILED_MESSAGE,
    EDIT_FAILED_MESSAGE,
    REPLY_FAILED_MESSAGE,
    VIEWER_MISSING_MESSAGE,
    CommentService,
    PlaceholderIdGenerator,
)
from discuss.domain.service.comment_tree import find_comment
from discuss.domain.value import CommentId, ThreadId, Username
from discuss.persistence.repository.inmemory import InMemoryDiscussionRepository
from tests.conftest import make_comment, make_thread

NOW = 1_700_000_000.0
THREAD = make_thread(7, "Episode 1 Discussion")


def _frozen_clock() -> float:
    return NOW


async def _open_thread(*comments, viewer: str | None = "tester", first_comment_id: int = 99):
    """Build a service with a loaded thread holding `comments`."""
    repository = InMemoryDiscussionRepository(
        viewer=Viewer(name=Username(viewer)) if viewer else None,
        clock=_frozen_clock,
        first_comment_id=first_comment_id,
    )
    repository.add_thread(1, THREAD)
    repository.add_comments(ThreadId(7), *comments)

    service = CommentService(discussion_repository=repository, clock=_frozen_clock)
    await service.load_viewer()
    await service.load_comments(THREAD)
    return service, repository


async def _settle() -> None:
    # Let started tasks run up to their first suspension
    await asyncio.sleep(0)


class TestLoading:
    """Tests for loading the viewer and comments."""

    @pytest.mark.asyncio
    async def test_load_comments(self):
        """Opening a thread should load its comments."""
        service, _ = await _open_thread(make_comment(1), make_comment(2))

        state = service.snapshot()
        assert state.thread_id == 7
        assert [c.id for c in state.comments] == [1, 2]
        assert state.is_loading is False
        assert state.error is None

    @pytest.mark.asyncio
    async def test_load_comments_failure_sets_error(self):
        """A failed fetch should surface the error and leave no comments."""
        # Arrange
        repository = InMemoryDiscussionRepository()
        repository.fail("fetch_comments")
        service = CommentService(discussion_repository=repository)

        # Act
        result = await service.load_comments(THREAD)

        # Assert
        assert result is None
        assert service.comments is None
        assert service.error == "fetch_comments failed"
        assert service.is_loading is False

    @pytest.mark.asyncio
    async def test_viewer_failure_is_only_logged(self):
        """A failed viewer fetch should not set the user-visible error."""
        repository = InMemoryDiscussionRepository()
        repository.fail("fetch_viewer")
        service = CommentService(discussion_repository=repository)

        assert await service.load_viewer() is None
        assert service.error is None

    @pytest.mark.asyncio
    async def test_comments_of_closed_thread_are_discarded(self):
        """A fetch that completes after the thread was closed should be dropped."""
        # Arrange
        repository = InMemoryDiscussionRepository()
        repository.add_comments(ThreadId(7), make_comment(1))
        gate = repository.hold("fetch_comments")
        service = CommentService(discussion_repository=repository)

        # Act
        task = asyncio.create_task(service.load_comments(THREAD))
        await _settle()
        service.reset()
        gate.set()
        result = await task

        # Assert
        assert result is None
        assert service.comments is None
        assert service.is_loading is False


class TestToggleLike:
    """Tests for like toggling."""

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_original(self):
        """Like then unlike should give back the original count and flag."""
        service, _ = await _open_thread(make_comment(1, like_count=3))

        await service.toggle_like(CommentId(1))
        node = find_comment(service.comments, CommentId(1))
        assert (node.like_count, node.is_liked) == (4, True)

        await service.toggle_like(CommentId(1))
        node = find_comment(service.comments, CommentId(1))
        assert (node.like_count, node.is_liked) == (3, False)

    @pytest.mark.asyncio
    async def test_nested_comment_can_be_liked(self):
        """Likes should reach comments at any depth."""
        service, _ = await _open_thread(
            make_comment(1, children=(make_comment(2, children=(make_comment(3),)),))
        )

        await service.toggle_like(CommentId(3))

        assert find_comment(service.comments, CommentId(3)).is_liked is True

    @pytest.mark.asyncio
    async def test_like_is_applied_before_remote_call(self):
        """The local flip should be visible while the remote call is pending."""
        service, repository = await _open_thread(make_comment(1, like_count=3))
        gate = repository.hold("toggle_like")

        task = asyncio.create_task(service.toggle_like(CommentId(1)))
        await _settle()

        assert find_comment(service.comments, CommentId(1)).like_count == 4
        gate.set()
        await task

    @pytest.mark.asyncio
    async def test_failed_like_is_not_rolled_back(self):
        """A like failure should keep the local state and show no error."""
        service, repository = await _open_thread(make_comment(1, like_count=3))
        repository.fail("toggle_like")

        await service.toggle_like(CommentId(1))

        node = find_comment(service.comments, CommentId(1))
        assert (node.like_count, node.is_liked) == (4, True)
        assert service.error is None

    @pytest.mark.asyncio
    async def test_like_is_not_blocked_by_pending_submission(self):
        """Likes should go through while a reply is in flight."""
        service, repository = await _open_thread(make_comment(1), make_comment(2))
        gate = repository.hold("save_comment")

        reply = asyncio.create_task(service.post_reply("hi", CommentId(1)))
        await _settle()
        await service.toggle_like(CommentId(2))

        assert service.is_submitting is True
        assert find_comment(service.comments, CommentId(2)).is_liked is True
        gate.set()
        await reply


class TestPostReply:
    """Tests for posting replies."""

    @pytest.mark.asyncio
    async def test_reply_shows_placeholder_then_canonical_node(self):
        """A reply should appear at once and be swapped for the saved node."""
        # Arrange
        service, repository = await _open_thread(make_comment(1))
        gate = repository.hold("save_comment")

        # Act
        task = asyncio.create_task(service.post_reply("hi", CommentId(1)))
        await _settle()

        # Assert - optimistic child
        children = find_comment(service.comments, CommentId(1)).children
        assert len(children) == 1
        assert children[0].raw_text == "hi"
        assert children[0].is_optimistic is True
        assert children[0].author_name == "tester"

        # Act - confirm
        gate.set()
        saved = await task

        # Assert - canonical child
        children = find_comment(service.comments, CommentId(1)).children
        assert [c.id for c in children] == [99]
        assert children[0].is_optimistic is False
        assert children[0].children == ()
        assert saved.id == 99
        assert service.is_submitting is False

    @pytest.mark.asyncio
    async def test_failed_reply_restores_tree(self):
        """A failed reply should leave the tree as it was before."""
        # Arrange
        service, repository = await _open_thread(make_comment(1), make_comment(2))
        before = service.comments
        repository.fail("save_comment")

        # Act
        result = await service.post_reply("hi", CommentId(1))

        # Assert
        assert result is None
        assert service.comments == before
        assert service.error == REPLY_FAILED_MESSAGE
        assert service.is_submitting is False

    @pytest.mark.asyncio
    async def test_top_level_reply_is_prepended(self):
        """Thread replies should appear first."""
        service, _ = await _open_thread(make_comment(1), make_comment(2))

        await service.post_reply("first!")

        assert [c.id for c in service.comments] == [99, 1, 2]

    @pytest.mark.asyncio
    async def test_second_submission_is_ignored_while_busy(self):
        """Submitting again while a reply is pending should do nothing."""
        # Arrange
        service, repository = await _open_thread(make_comment(1))
        gate = repository.hold("save_comment")

        # Act
        first = asyncio.create_task(service.post_reply("one"))
        await _settle()
        second = await service.post_reply("two")
        gate.set()
        await first

        # Assert
        assert second is None
        assert service.error is None
        assert [c.raw_text for c in service.comments] == ["one", "comment"]
        assert [call[0] for call in repository.calls].count("save_comment") == 1

    @pytest.mark.asyncio
    async def test_reply_without_viewer(self):
        """Without a signed-in user the reply should be refused."""
        service, repository = await _open_thread(make_comment(1), viewer=None)

        result = await service.post_reply("hi", CommentId(1))

        assert result is None
        assert service.error == VIEWER_MISSING_MESSAGE
        assert service.is_submitting is False
        assert find_comment(service.comments, CommentId(1)).children == ()
        assert not any(call[0] == "save_comment" for call in repository.calls)

    @pytest.mark.asyncio
    async def test_reply_to_unknown_parent_is_not_sent(self):
        """A reply whose parent is not in the tree should never reach the backend."""
        service, repository = await _open_thread(make_comment(1))

        result = await service.post_reply("hi", CommentId(42))

        assert result is None
        assert service.is_submitting is False
        assert [c.id for c in service.comments] == [1]
        assert find_comment(service.comments, CommentId(1)).children == ()
        assert not any(call[0] == "save_comment" for call in repository.calls)

    @pytest.mark.asyncio
    async def test_blank_reply_is_ignored(self):
        """Whitespace-only text should not be posted."""
        service, repository = await _open_thread(make_comment(1))

        assert await service.post_reply("   ") is None
        assert not any(call[0] == "save_comment" for call in repository.calls)

    @pytest.mark.asyncio
    async def test_reply_requires_open_thread(self):
        """Nothing should be posted when no thread is open."""
        service = CommentService(discussion_repository=InMemoryDiscussionRepository())

        assert await service.post_reply("hi") is None
        assert service.comments is None

    @pytest.mark.asyncio
    async def test_reply_clears_reply_state(self):
        """Reply intent should be cleared once the reply is done."""
        service, _ = await _open_thread(make_comment(1))
        service.begin_reply(CommentId(1))

        await service.post_reply("hi", CommentId(1))

        assert service.replying_to_comment_id is None

    @pytest.mark.asyncio
    async def test_confirmations_apply_out_of_order(self):
        """A like confirmed before a pending reply should not disturb it."""
        # Arrange
        service, repository = await _open_thread(make_comment(1), make_comment(2))
        save_gate = repository.hold("save_comment")
        like_gate = repository.hold("toggle_like")

        # Act
        reply = asyncio.create_task(service.post_reply("hi", CommentId(1)))
        await _settle()
        like = asyncio.create_task(service.toggle_like(CommentId(2)))
        await _settle()
        like_gate.set()
        await like
        save_gate.set()
        await reply

        # Assert
        assert [c.id for c in find_comment(service.comments, CommentId(1)).children] == [99]
        assert find_comment(service.comments, CommentId(2)).is_liked is True

    @pytest.mark.asyncio
    async def test_late_confirmation_for_closed_thread_is_dropped(self):
        """A reply confirmed after the thread was closed should not revive it."""
        service, repository = await _open_thread(make_comment(1))
        gate = repository.hold("save_comment")

        task = asyncio.create_task(service.post_reply("hi"))
        await _settle()
        service.reset()
        gate.set()
        await task

        assert service.comments is None


class TestEditComment:
    """Tests for editing comments."""

    @pytest.mark.asyncio
    async def test_edit_overwrites_text(self):
        """A successful edit should keep the new text."""
        service, repository = await _open_thread(make_comment(1, "old", author="tester"))
        service.begin_edit(CommentId(1))

        assert await service.edit_comment(CommentId(1), "new") is True
        assert find_comment(service.comments, CommentId(1)).raw_text == "new"
        assert find_comment(repository.stored_comments(ThreadId(7)), CommentId(1)).raw_text == "new"
        assert service.editing_comment_id is None

    @pytest.mark.asyncio
    async def test_edit_leaves_edit_state_immediately(self):
        """Edit mode should end before the backend answers."""
        service, repository = await _open_thread(make_comment(1, "old"))
        gate = repository.hold("update_comment")
        service.begin_edit(CommentId(1))

        task = asyncio.create_task(service.edit_comment(CommentId(1), "new"))
        await _settle()

        assert service.editing_comment_id is None
        assert find_comment(service.comments, CommentId(1)).raw_text == "new"
        gate.set()
        await task

    @pytest.mark.asyncio
    async def test_failed_edit_restores_previous_text(self):
        """A failed edit should bring back the old text."""
        service, repository = await _open_thread(
            make_comment(1, children=(make_comment(2, "old"),))
        )
        repository.fail("update_comment")

        assert await service.edit_comment(CommentId(2), "new") is False
        assert find_comment(service.comments, CommentId(2)).raw_text == "old"
        assert service.error == EDIT_FAILED_MESSAGE
        assert service.is_submitting is False


class TestDeleteComment:
    """Tests for deleting comments."""

    @pytest.mark.asyncio
    async def test_delete_removes_subtree(self):
        """Deleting should remove the comment and its replies."""
        service, _ = await _open_thread(
            make_comment(1, children=(make_comment(2),)), make_comment(3)
        )

        assert await service.delete_comment(CommentId(1)) is True
        assert [c.id for c in service.comments] == [3]

    @pytest.mark.asyncio
    async def test_refused_delete_is_not_restored(self):
        """A delete the backend refuses should stay removed with an error."""
        service, repository = await _open_thread(make_comment(1), make_comment(3))
        repository.delete_result = False

        assert await service.delete_comment(CommentId(1)) is False
        assert [c.id for c in service.comments] == [3]
        assert service.error == DELETE_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_failed_delete_is_not_restored(self):
        """A delete that raises should behave like a refused one."""
        service, repository = await _open_thread(make_comment(1))
        repository.fail("delete_comment")

        assert await service.delete_comment(CommentId(1)) is False
        assert service.comments == ()
        assert service.error == DELETE_FAILED_MESSAGE
        assert service.is_submitting is False


class TestIntents:
    """Tests for reply/edit/delete UI state."""

    @pytest.mark.asyncio
    async def test_begin_clears_other_intents(self):
        """Starting one action should cancel the others."""
        service, _ = await _open_thread(make_comment(1))

        service.begin_thread_reply()
        service.begin_delete(CommentId(1))

        assert service.is_replying_to_thread is False
        assert service.deleting_comment_id == 1

    @pytest.mark.asyncio
    async def test_begin_edit_returns_editable_text(self):
        """The editor should be prefilled with newlines instead of <br>."""
        service, _ = await _open_thread(make_comment(1, "a<br>b"))

        assert service.begin_edit(CommentId(1)) == "a\nb"
        assert service.editing_comment_id == 1

    @pytest.mark.asyncio
    async def test_begin_edit_unknown_comment(self):
        """Editing a comment that is not in the tree should not start."""
        service, _ = await _open_thread(make_comment(1))

        assert service.begin_edit(CommentId(5)) is None
        assert service.editing_comment_id is None

    @pytest.mark.asyncio
    async def test_cancel_clears_intents(self):
        """Cancelling should leave the tree untouched and drop the intent."""
        service, _ = await _open_thread(make_comment(1))

        service.begin_reply(CommentId(1))
        service.cancel_reply()
        assert service.replying_to_comment_id is None

        service.begin_edit(CommentId(1))
        service.cancel_edit()
        assert service.editing_comment_id is None

        service.begin_delete(CommentId(1))
        service.cancel_delete()
        assert service.deleting_comment_id is None
        assert [c.id for c in service.comments] == [1]

    @pytest.mark.asyncio
    async def test_can_modify_only_own_comments(self):
        """Only the author should be allowed to edit or delete."""
        service, _ = await _open_thread()

        assert service.can_modify(make_comment(1, author="tester")) is True
        assert service.can_modify(make_comment(2, author="someone")) is False


class TestPlaceholderIdGenerator:
    """Tests for placeholder ids."""

    def test_ids_increase_with_frozen_clock(self):
        """Ids should stay unique even when the clock does not move."""
        generator = PlaceholderIdGenerator(clock=_frozen_clock)

        ids = [generator.next_id() for _ in range(3)]

        assert ids == [int(NOW * 1000), int(NOW * 1000) + 1, int(NOW * 1000) + 2]

    def test_ids_follow_wall_clock(self):
        """Ids should be milliseconds of the clock."""
        ticks = iter([1.0, 2.5])
        generator = PlaceholderIdGenerator(clock=lambda: next(ticks))

        assert [generator.next_id(), generator.next_id()] == [1000, 2500]
