"""Authorization gate collaborator.

Role management lives outside the engine. The gate answers one question:
may this actor delete other people's comments here?
"""

from abc import ABC, abstractmethod

from agora.domain.model.comment import Comment
from agora.domain.value import UserId


class AuthorizationGate(ABC):
    """Decides moderation rights for comment deletion."""

    @abstractmethod
    async def can_moderate(self, actor_id: UserId, comment: Comment) -> bool:
        """Check whether an actor may delete a comment they did not write.

        Args:
            actor_id: The acting user
            comment: The comment about to be deleted

        Returns:
            True if the actor holds moderation rights over the comment
        """
        pass
