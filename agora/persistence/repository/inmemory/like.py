"""In-memory like repository for testing."""

from datetime import datetime
from typing import Sequence
from uuid import UUID, uuid4

from agora.domain.error import ConflictError, NotFoundError
from agora.domain.model.like import Like
from agora.domain.repository.like import LikeRepository
from agora.domain.value import LikeId, TargetType, UserId

LikeKey = tuple[UserId, UUID, TargetType]


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing.

    Check-and-insert runs without an intervening ``await``, which makes it
    atomic with respect to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._likes: dict[LikeKey, Like] = {}

    async def exists(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> bool:
        """Check whether the user has liked the target."""
        return (actor_id, target_id, target_type) in self._likes

    async def insert(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> Like:
        """Insert a like.

        Raises:
            ConflictError: If the like already exists
        """
        key = (actor_id, target_id, target_type)
        if key in self._likes:
            raise ConflictError("Like", f"{actor_id}:{target_type.value}:{target_id}")

        like = Like(
            id=LikeId(uuid4()),
            user_id=actor_id,
            target_id=target_id,
            target_type=target_type,
            created_at=datetime.now(),
        )
        self._likes[key] = like
        return like

    async def remove(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> None:
        """Delete a like.

        Raises:
            NotFoundError: If the like does not exist
        """
        if self._likes.pop((actor_id, target_id, target_type), None) is None:
            raise NotFoundError("Like", f"{actor_id}:{target_type.value}:{target_id}")

    async def count_for_target(self, target_id: UUID, target_type: TargetType) -> int:
        """Count likes on a target."""
        return sum(
            1
            for like in self._likes.values()
            if like.target_id == target_id and like.target_type == target_type
        )

    async def find_liked_target_ids(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """Find which of the given targets a user has liked (batch query)."""
        wanted = set(target_ids)
        return {
            like.target_id
            for like in self._likes.values()
            if like.user_id == user_id
            and like.target_type == target_type
            and like.target_id in wanted
        }

    async def count_for_targets(
        self, target_ids: Sequence[UUID], target_type: TargetType
    ) -> int:
        """Count likes across several targets of one kind."""
        wanted = set(target_ids)
        return sum(
            1
            for like in self._likes.values()
            if like.target_id in wanted and like.target_type == target_type
        )
