"""Like repository interface."""

from abc import abstractmethod
from typing import Sequence
from uuid import UUID

from agora.domain.model.like import Like
from agora.domain.repository.relationship import RelationshipRepository
from agora.domain.value import TargetType, UserId


class LikeRepository(RelationshipRepository[Like]):
    """Repository for Like records on projects and comments."""

    @abstractmethod
    async def find_liked_target_ids(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """Find which of the given targets a user has liked (batch query).

        Args:
            user_id: The user's ID
            target_type: Kind of the targets
            target_ids: Target IDs to check

        Returns:
            Subset of ``target_ids`` liked by the user
        """
        pass

    @abstractmethod
    async def count_for_targets(
        self, target_ids: Sequence[UUID], target_type: TargetType
    ) -> int:
        """Count likes across several targets of one kind."""
        pass
