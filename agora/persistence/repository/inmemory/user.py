"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from agora.domain.error import NotFoundError
from agora.domain.model.user import User
from agora.domain.repository.user import UserRepository
from agora.domain.value import CounterName, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        self._users[user.id] = user
        return user

    async def adjust_follow_counts(
        self, follower_id: UserId, following_id: UserId, delta: int
    ) -> tuple[int, int]:
        """Shift both sides of a follow edge together."""
        follower = self._users.get(follower_id)
        if follower is None:
            raise NotFoundError("User", str(follower_id))
        followed = self._users.get(following_id)
        if followed is None:
            raise NotFoundError("User", str(following_id))

        now = datetime.now()
        following_count = max(follower.stats.following + delta, 0)
        followers_count = max(followed.stats.followers + delta, 0)
        self._users[follower_id] = follower.model_copy(
            update={
                "stats": follower.stats.model_copy(
                    update={"following": following_count}
                ),
                "updated_at": now,
            }
        )
        # Re-read in case follower and followed are the same record
        followed = self._users[following_id]
        self._users[following_id] = followed.model_copy(
            update={
                "stats": followed.stats.model_copy(
                    update={"followers": followers_count}
                ),
                "updated_at": now,
            }
        )
        return following_count, followers_count

    async def set_counter(
        self, user_id: UserId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter."""
        user = self._users.get(user_id)
        if user is None:
            return
        self._users[user_id] = user.model_copy(
            update={"stats": user.stats.model_copy(update={counter.value: value})}
        )

    async def find_ids(
        self, limit: int, after: Optional[UserId] = None
    ) -> list[UserId]:
        """List user IDs in ascending order."""
        ids = sorted(self._users)
        if after is not None:
            ids = [uid for uid in ids if uid > after]
        return ids[:limit]
