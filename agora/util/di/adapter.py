"""Adapter DI providers."""

from dishka import Scope, provide

from agora.adapter.directory import UserTableActorDirectory
from agora.adapter.moderation import ConfiguredAuthorizationGate
from agora.config import ModerationSettings
from agora.domain.repository import ProjectRepository, UserRepository
from agora.domain.service import ActorDirectory, AuthorizationGate
from agora.util.di.base import ProviderBase


class AdapterProvider(ProviderBase):
    """Collaborator adapters.

    REQUEST-scoped because both adapters read through repositories.
    """

    scope = Scope.REQUEST

    @provide
    def get_actor_directory(self, user_repository: UserRepository) -> ActorDirectory:
        """Provide actor directory backed by the users table."""
        return UserTableActorDirectory(user_repository=user_repository)

    @provide
    def get_authorization_gate(
        self,
        moderation_settings: ModerationSettings,
        project_repository: ProjectRepository,
    ) -> AuthorizationGate:
        """Provide authorization gate for comment moderation."""
        return ConfiguredAuthorizationGate(
            settings=moderation_settings, project_repository=project_repository
        )
