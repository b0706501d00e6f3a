"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from agora.config import (
    InteractionSettings,
    ModerationSettings,
    PaginationSettings,
    Settings,
    ThreadSettings,
)
from agora.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_thread_settings(self, settings: Settings) -> ThreadSettings:
        """Provide comment thread settings."""
        return settings.threads

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        """Provide listing page size settings."""
        return settings.pagination

    @provide(scope=Scope.APP)
    def provide_interaction_settings(self, settings: Settings) -> InteractionSettings:
        """Provide toggle and counter settings."""
        return settings.interactions

    @provide(scope=Scope.APP)
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        """Provide moderation settings."""
        return settings.moderation
