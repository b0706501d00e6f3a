"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.config import InteractionSettings, PaginationSettings, ThreadSettings
from agora.domain.repository import (
    CommentRepository,
    FollowRepository,
    LikeRepository,
    ProjectRepository,
    UserRepository,
)
from agora.domain.service import (
    ActorDirectory,
    CommentService,
    CounterService,
    ProjectService,
    QueryService,
    ToggleService,
    UserService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_project_service(
        self, project_repository: ProjectRepository
    ) -> ProjectService:
        """Provide project domain service."""
        return ProjectService(project_repository=project_repository)

    @provide
    def get_counter_service(
        self,
        user_repository: UserRepository,
        project_repository: ProjectRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        follow_repository: FollowRepository,
    ) -> CounterService:
        """Provide counter synchronization service."""
        return CounterService(
            user_repository=user_repository,
            project_repository=project_repository,
            comment_repository=comment_repository,
            like_repository=like_repository,
            follow_repository=follow_repository,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        project_service: ProjectService,
        counter_service: CounterService,
        thread_settings: ThreadSettings,
        pagination_settings: PaginationSettings,
    ) -> CommentService:
        """Provide comment thread service."""
        return CommentService(
            comment_repository=comment_repository,
            project_service=project_service,
            counter_service=counter_service,
            thread_settings=thread_settings,
            pagination_settings=pagination_settings,
        )

    @provide
    def get_toggle_service(
        self,
        like_repository: LikeRepository,
        follow_repository: FollowRepository,
        counter_service: CounterService,
        project_service: ProjectService,
        user_service: UserService,
        comment_service: CommentService,
        interaction_settings: InteractionSettings,
    ) -> ToggleService:
        """Provide like/follow toggle service."""
        return ToggleService(
            like_repository=like_repository,
            follow_repository=follow_repository,
            counter_service=counter_service,
            project_service=project_service,
            user_service=user_service,
            comment_service=comment_service,
            max_attempts=interaction_settings.toggle_max_attempts,
        )

    @provide
    def get_query_service(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        user_service: UserService,
        like_repository: LikeRepository,
        project_repository: ProjectRepository,
        comment_repository: CommentRepository,
        follow_repository: FollowRepository,
        actor_directory: ActorDirectory,
        pagination_settings: PaginationSettings,
    ) -> QueryService:
        """Provide read-side query service."""
        return QueryService(
            comment_service=comment_service,
            counter_service=counter_service,
            user_service=user_service,
            like_repository=like_repository,
            project_repository=project_repository,
            comment_repository=comment_repository,
            follow_repository=follow_repository,
            actor_directory=actor_directory,
            pagination_settings=pagination_settings,
        )
