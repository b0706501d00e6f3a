"""In-memory follow repository for testing."""

from datetime import datetime
from typing import Sequence
from uuid import UUID, uuid4

from agora.domain.error import ConflictError, NotFoundError
from agora.domain.model.follow import Follow
from agora.domain.repository.follow import FollowRepository
from agora.domain.value import FollowId, TargetType, UserId


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        self._follows: dict[tuple[UserId, UserId], Follow] = {}

    async def exists(
        self,
        actor_id: UserId,
        target_id: UUID,
        target_type: TargetType = TargetType.USER,
    ) -> bool:
        """Check whether ``actor_id`` follows ``target_id``."""
        return (actor_id, UserId(target_id)) in self._follows

    async def insert(
        self,
        actor_id: UserId,
        target_id: UUID,
        target_type: TargetType = TargetType.USER,
    ) -> Follow:
        """Insert a follow edge.

        Raises:
            ConflictError: If the edge already exists
        """
        key = (actor_id, UserId(target_id))
        if key in self._follows:
            raise ConflictError("Follow", f"{actor_id}->{target_id}")

        follow = Follow(
            id=FollowId(uuid4()),
            follower_id=actor_id,
            following_id=UserId(target_id),
            created_at=datetime.now(),
        )
        self._follows[key] = follow
        return follow

    async def remove(
        self,
        actor_id: UserId,
        target_id: UUID,
        target_type: TargetType = TargetType.USER,
    ) -> None:
        """Delete a follow edge.

        Raises:
            NotFoundError: If the edge does not exist
        """
        if self._follows.pop((actor_id, UserId(target_id)), None) is None:
            raise NotFoundError("Follow", f"{actor_id}->{target_id}")

    async def count_for_target(
        self, target_id: UUID, target_type: TargetType = TargetType.USER
    ) -> int:
        """Count followers of a user."""
        return sum(1 for f in self._follows.values() if f.following_id == target_id)

    async def count_by_actor(self, follower_id: UserId) -> int:
        """Count users followed by a user."""
        return sum(1 for f in self._follows.values() if f.follower_id == follower_id)

    def _newest_first(self, follows: list[Follow]) -> list[Follow]:
        # Insertion order breaks created_at ties
        ordered = list(reversed(follows))
        ordered.sort(key=lambda f: f.created_at, reverse=True)
        return ordered

    async def find_followers(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Follow]:
        """Find edges pointing at a user, newest first."""
        edges = [f for f in self._follows.values() if f.following_id == user_id]
        return self._newest_first(edges)[offset : offset + limit]

    async def find_following(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Follow]:
        """Find edges leaving a user, newest first."""
        edges = [f for f in self._follows.values() if f.follower_id == user_id]
        return self._newest_first(edges)[offset : offset + limit]

    async def find_followed_ids(
        self, follower_id: UserId, user_ids: Sequence[UserId]
    ) -> set[UserId]:
        """Find which of the given users a user follows (batch query)."""
        return {uid for uid in user_ids if (follower_id, uid) in self._follows}
