"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.domain.repository import DiscussionRepository
from discuss.domain.service import CommentService, MarkupService, ThreadService
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: the comment service holds the open
    thread and its forest for the whole session, and the thread service
    caches listings across requests.
    """

    scope = Scope.APP

    @provide
    def get_markup_service(self) -> MarkupService:
        """Provide markup domain service."""
        return MarkupService()

    @provide
    def get_thread_service(
        self, discussion_repository: DiscussionRepository
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(discussion_repository=discussion_repository)

    @provide
    def get_comment_service(
        self, discussion_repository: DiscussionRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(discussion_repository=discussion_repository)
