"""Authorization gate driven by configuration and project ownership."""

import logfire

from agora.config import ModerationSettings
from agora.domain.model.comment import Comment
from agora.domain.repository import ProjectRepository
from agora.domain.service.authorization_gate import AuthorizationGate
from agora.domain.value import UserId


class ConfiguredAuthorizationGate(AuthorizationGate):
    """Grants moderation to configured moderators and project owners."""

    def __init__(
        self, settings: ModerationSettings, project_repository: ProjectRepository
    ) -> None:
        self.moderator_ids = set(settings.moderator_ids)
        self.project_owner_can_moderate = settings.project_owner_can_moderate
        self.project_repository = project_repository

    async def can_moderate(self, actor_id: UserId, comment: Comment) -> bool:
        """Check configured moderators first, then project ownership."""
        if actor_id in self.moderator_ids:
            logfire.info("Moderator access granted", actor_id=str(actor_id))
            return True

        if self.project_owner_can_moderate:
            project = await self.project_repository.find_by_id(comment.project_id)
            if project and project.owner_id == actor_id:
                logfire.info(
                    "Project owner moderation granted",
                    actor_id=str(actor_id),
                    project_id=str(project.id),
                )
                return True

        return False
