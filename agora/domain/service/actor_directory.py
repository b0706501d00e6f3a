"""Actor directory collaborator.

Listings show who wrote each comment, but user profiles are owned by the
identity service. The directory resolves actor IDs into display summaries.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from agora.domain.value import UserId
from agora.domain.value.common import ValueObject


class ActorSummary(ValueObject):
    """Public display data for an actor."""

    id: UserId
    username: str
    name: str
    avatar_url: Optional[str] = None


class ActorDirectory(ABC):
    """Resolves actor IDs to display summaries."""

    @abstractmethod
    async def resolve(self, actor_ids: Sequence[UserId]) -> dict[UserId, ActorSummary]:
        """Resolve several actors at once.

        Args:
            actor_ids: Actor IDs; duplicates are tolerated

        Returns:
            Mapping of ID to summary; unknown actors are omitted
        """
        pass
