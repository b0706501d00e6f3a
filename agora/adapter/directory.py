"""Actor directory backed by the users table."""

from typing import Sequence

import logfire

from agora.domain.repository import UserRepository
from agora.domain.service.actor_directory import ActorDirectory, ActorSummary
from agora.domain.value import UserId


class UserTableActorDirectory(ActorDirectory):
    """Resolves actors from the local users table.

    Users are replicated into this database by the identity service, so a
    batch read is enough and no remote call is needed.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def resolve(self, actor_ids: Sequence[UserId]) -> dict[UserId, ActorSummary]:
        """Resolve several actors with one query."""
        unique_ids = list(dict.fromkeys(actor_ids))
        if not unique_ids:
            return {}

        with logfire.span("actor_directory.resolve", count=len(unique_ids)):
            users = await self.user_repository.find_by_ids(unique_ids)
            missing = len(unique_ids) - len(users)
            if missing:
                logfire.warn("Unknown actors in directory lookup", missing=missing)
            return {
                user.id: ActorSummary(
                    id=user.id,
                    username=str(user.username),
                    name=user.name,
                    avatar_url=user.avatar_url,
                )
                for user in users
            }
