"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    GetCommentsUseCase,
    GetRepliesUseCase,
    UpdateCommentUseCase,
)
from agora.application.usecase.counter import (
    GetCountsUseCase,
    ReconcileCountersUseCase,
)
from agora.application.usecase.follow import (
    GetFollowStatusUseCase,
    GetUserStatsUseCase,
    ListFollowsUseCase,
    ToggleFollowUseCase,
)
from agora.application.usecase.like import ToggleLikeUseCase
from agora.domain.service import (
    AuthorizationGate,
    CommentService,
    CounterService,
    QueryService,
    ToggleService,
)
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, toggle_service: ToggleService
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(toggle_service=toggle_service)

    # Follow use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_follow_use_case(
        self, toggle_service: ToggleService
    ) -> ToggleFollowUseCase:
        """Provide toggle follow use case."""
        return ToggleFollowUseCase(toggle_service=toggle_service)

    @provide(scope=Scope.REQUEST)
    def get_follow_status_use_case(
        self, query_service: QueryService
    ) -> GetFollowStatusUseCase:
        """Provide get follow status use case."""
        return GetFollowStatusUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_list_follows_use_case(
        self, query_service: QueryService
    ) -> ListFollowsUseCase:
        """Provide list follows use case."""
        return ListFollowsUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_user_stats_use_case(
        self, query_service: QueryService
    ) -> GetUserStatsUseCase:
        """Provide get user stats use case."""
        return GetUserStatsUseCase(query_service=query_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        authorization_gate: AuthorizationGate,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            authorization_gate=authorization_gate,
        )

    @provide(scope=Scope.REQUEST)
    def get_comments_use_case(self, query_service: QueryService) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_replies_use_case(self, query_service: QueryService) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_use_case(self, query_service: QueryService) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(query_service=query_service)

    # Counter use cases
    @provide(scope=Scope.REQUEST)
    def get_counts_use_case(self, query_service: QueryService) -> GetCountsUseCase:
        """Provide get counts use case."""
        return GetCountsUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_reconcile_counters_use_case(
        self, counter_service: CounterService
    ) -> ReconcileCountersUseCase:
        """Provide reconcile counters use case."""
        return ReconcileCountersUseCase(counter_service=counter_service)
