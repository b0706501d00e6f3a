"""Relationship repository interface.

Likes and follows are both (actor, target) tuples whose uniqueness is
guarded by the storage layer. This module defines the shared contract.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from uuid import UUID

from agora.domain.model.common import DomainModel
from agora.domain.value import TargetType, UserId

R = TypeVar("R", bound=DomainModel)


class RelationshipRepository(ABC, Generic[R]):
    """Repository for (actor, target) relationship records.

    Implementations must make ``insert`` and ``remove`` atomic with respect
    to the uniqueness constraint: two concurrent inserts of the same tuple
    must yield exactly one success and one ``ConflictError``.
    """

    @abstractmethod
    async def exists(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> bool:
        """Check whether the relationship tuple exists.

        Args:
            actor_id: The acting user
            target_id: ID of the target entity
            target_type: Kind of the target entity

        Returns:
            True if a record exists, False otherwise
        """
        pass

    @abstractmethod
    async def insert(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> R:
        """Create the relationship record.

        Uniqueness is decided by the storage constraint itself, never by a
        prior read.

        Args:
            actor_id: The acting user
            target_id: ID of the target entity
            target_type: Kind of the target entity

        Returns:
            The created record

        Raises:
            ConflictError: If the tuple already exists
            StoreUnavailableError: On storage failure
        """
        pass

    @abstractmethod
    async def remove(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> None:
        """Delete the relationship record.

        Args:
            actor_id: The acting user
            target_id: ID of the target entity
            target_type: Kind of the target entity

        Raises:
            NotFoundError: If no record was deleted
            StoreUnavailableError: On storage failure
        """
        pass

    @abstractmethod
    async def count_for_target(self, target_id: UUID, target_type: TargetType) -> int:
        """Count live records pointing at a target.

        This is the ground truth the denormalized counters are checked against.

        Args:
            target_id: ID of the target entity
            target_type: Kind of the target entity

        Returns:
            Number of records
        """
        pass
