"""Follow repository interface."""

from abc import abstractmethod
from typing import List, Sequence

from agora.domain.model.follow import Follow
from agora.domain.repository.relationship import RelationshipRepository
from agora.domain.value import UserId


class FollowRepository(RelationshipRepository[Follow]):
    """Repository for Follow edges.

    The relationship target is always a user, so ``target_type`` is
    ``TargetType.USER`` for every call.
    """

    @abstractmethod
    async def count_by_actor(self, follower_id: UserId) -> int:
        """Count how many users a user follows.

        Args:
            follower_id: The following user's ID

        Returns:
            Number of outgoing follow edges
        """
        pass

    @abstractmethod
    async def find_followers(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Follow]:
        """Find edges pointing at a user, newest first.

        Args:
            user_id: The followed user's ID
            limit: Maximum number of edges to return
            offset: Number of edges to skip

        Returns:
            List of follow edges
        """
        pass

    @abstractmethod
    async def find_following(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Follow]:
        """Find edges leaving a user, newest first.

        Args:
            user_id: The following user's ID
            limit: Maximum number of edges to return
            offset: Number of edges to skip

        Returns:
            List of follow edges
        """
        pass

    @abstractmethod
    async def find_followed_ids(
        self, follower_id: UserId, user_ids: Sequence[UserId]
    ) -> set[UserId]:
        """Find which of the given users a user follows (batch query).

        Args:
            follower_id: The following user's ID
            user_ids: Candidate user IDs

        Returns:
            Subset of ``user_ids`` followed by ``follower_id``
        """
        pass
