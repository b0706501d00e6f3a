"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from agora.domain.model.user import User
from agora.domain.value import CounterName, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users at once (batch query).

        Args:
            user_ids: User IDs to load; unknown IDs are ignored

        Returns:
            The users found, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def adjust_follow_counts(
        self, follower_id: UserId, following_id: UserId, delta: int
    ) -> tuple[int, int]:
        """Atomically shift both sides of a follow edge in one statement.

        The follower's ``following`` and the followed user's ``followers``
        counters move by ``delta`` together or not at all. Counters are
        clamped at zero.

        Args:
            follower_id: The user doing the following
            following_id: The user being followed
            delta: Amount to add (negative to subtract)

        Returns:
            Tuple of (follower's following count, followed user's followers count)

        Raises:
            NotFoundError: If either user does not exist
        """
        pass

    @abstractmethod
    async def set_counter(
        self, user_id: UserId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter (used by reconciliation).

        Args:
            user_id: The user's ID
            counter: FOLLOWERS or FOLLOWING
            value: The new value
        """
        pass

    @abstractmethod
    async def find_ids(
        self, limit: int, after: Optional[UserId] = None
    ) -> List[UserId]:
        """List user IDs in ascending order (keyset pagination).

        Args:
            limit: Maximum number of IDs to return
            after: Only return IDs greater than this one

        Returns:
            List of user IDs
        """
        pass
