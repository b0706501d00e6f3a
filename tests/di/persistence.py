"""Mock persistence providers for testing."""

from dishka import Scope, provide

from agora.domain.repository import (
    CommentRepository,
    FollowRepository,
    LikeRepository,
    ProjectRepository,
    UserRepository,
)
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryFollowRepository,
    InMemoryLikeRepository,
    InMemoryProjectRepository,
    InMemoryUserRepository,
)
from agora.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests made against one test
    container (HTTP tests issue several requests). Each test builds its own
    container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_project_repository(self) -> ProjectRepository:
        """Provide in-memory project repository."""
        return InMemoryProjectRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_like_repository(self) -> LikeRepository:
        """Provide in-memory like repository."""
        return InMemoryLikeRepository()

    @provide(scope=Scope.APP)
    def get_follow_repository(self) -> FollowRepository:
        """Provide in-memory follow repository."""
        return InMemoryFollowRepository()
