"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import case, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import NotFoundError
from agora.domain.model import User
from agora.domain.repository import UserRepository
from agora.domain.value import CounterName, UserId
from agora.persistence.error import translate_store_errors
from agora.persistence.mappers import counter_column, row_to_user, user_to_dict
from agora.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_store_errors
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    @translate_store_errors
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users at once."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    @translate_store_errors
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        user_dict = user_to_dict(user)
        existing = await self.find_by_id(user.id)

        if existing:
            stmt = (
                update(users_table)
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = insert(users_table).values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return user

    @translate_store_errors
    async def adjust_follow_counts(
        self, follower_id: UserId, following_id: UserId, delta: int
    ) -> tuple[int, int]:
        """Shift both sides of a follow edge in a single UPDATE."""
        following_col = users_table.c.following_count
        followers_col = users_table.c.followers_count
        stmt = (
            update(users_table)
            .where(users_table.c.id.in_([follower_id, following_id]))
            .values(
                following_count=case(
                    (
                        users_table.c.id == follower_id,
                        func.greatest(following_col + delta, 0),
                    ),
                    else_=following_col,
                ),
                followers_count=case(
                    (
                        users_table.c.id == following_id,
                        func.greatest(followers_col + delta, 0),
                    ),
                    else_=followers_col,
                ),
                updated_at=datetime.now(),
            )
            .returning(users_table.c.id, following_col, followers_col)
        )
        result = await self.session.execute(stmt)
        rows = {row.id: row for row in result.fetchall()}
        await self.session.flush()

        if follower_id not in rows:
            raise NotFoundError("User", str(follower_id))
        if following_id not in rows:
            raise NotFoundError("User", str(following_id))
        return rows[follower_id].following_count, rows[following_id].followers_count

    @translate_store_errors
    async def set_counter(
        self, user_id: UserId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values({counter_column(counter): value})
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @translate_store_errors
    async def find_ids(
        self, limit: int, after: Optional[UserId] = None
    ) -> List[UserId]:
        """List user IDs in ascending order."""
        stmt = select(users_table.c.id).order_by(users_table.c.id).limit(limit)
        if after is not None:
            stmt = stmt.where(users_table.c.id > after)
        result = await self.session.execute(stmt)
        return [UserId(uid) for uid in result.scalars().all()]
