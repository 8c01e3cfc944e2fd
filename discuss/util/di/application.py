"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetCommentTreeUseCase,
    LoadCommentsUseCase,
    PostReplyUseCase,
    ToggleLikeUseCase,
)
from discuss.application.usecase.markup import ParseMarkupUseCase
from discuss.application.usecase.thread import ListThreadsUseCase
from discuss.domain.service import CommentService, MarkupService, ThreadService
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Markup use cases
    @provide(scope=Scope.REQUEST)
    def get_parse_markup_use_case(
        self, markup_service: MarkupService
    ) -> ParseMarkupUseCase:
        """Provide parse markup use case."""
        return ParseMarkupUseCase(markup_service=markup_service)

    # Thread use cases
    @provide(scope=Scope.REQUEST)
    def get_list_threads_use_case(
        self, thread_service: ThreadService
    ) -> ListThreadsUseCase:
        """Provide list threads use case."""
        return ListThreadsUseCase(thread_service=thread_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_load_comments_use_case(
        self, comment_service: CommentService, thread_service: ThreadService
    ) -> LoadCommentsUseCase:
        """Provide load comments use case."""
        return LoadCommentsUseCase(
            comment_service=comment_service, thread_service=thread_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_tree_use_case(
        self, comment_service: CommentService
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, comment_service: CommentService
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_post_reply_use_case(
        self, comment_service: CommentService
    ) -> PostReplyUseCase:
        """Provide post reply use case."""
        return PostReplyUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_comment_use_case(
        self, comment_service: CommentService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)
