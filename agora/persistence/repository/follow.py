"""PostgreSQL implementation of Follow repository."""

from datetime import datetime
from typing import List, Sequence
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, desc, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import ConflictError, NotFoundError
from agora.domain.model import Follow
from agora.domain.repository import FollowRepository
from agora.domain.value import FollowId, TargetType, UserId
from agora.persistence.error import translate_store_errors
from agora.persistence.mappers import follow_to_dict, row_to_follow
from agora.persistence.tables import follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _edge(follower_id: UserId, following_id: UUID):
        return and_(
            follows_table.c.follower_id == follower_id,
            follows_table.c.following_id == following_id,
        )

    @translate_store_errors
    async def exists(
        self,
        actor_id: UserId,
        target_id: UUID,
        target_type: TargetType = TargetType.USER,
    ) -> bool:
        """Check whether ``actor_id`` follows ``target_id``."""
        stmt = select(follows_table.c.id).where(self._edge(actor_id, target_id))
        result = await self.session.execute(stmt)
        return result.first() is not None

    @translate_store_errors
    async def insert(
        self,
        actor_id: UserId,
        target_id: UUID,
        target_type: TargetType = TargetType.USER,
    ) -> Follow:
        """Insert a follow edge; the unique constraint decides conflicts."""
        follow = Follow(
            id=FollowId(uuid4()),
            follower_id=actor_id,
            following_id=UserId(target_id),
            created_at=datetime.now(),
        )
        stmt = (
            insert(follows_table)
            .values(**follow_to_dict(follow))
            .on_conflict_do_nothing(constraint="uq_follow")
            .returning(follows_table.c.id)
        )
        result = await self.session.execute(stmt)
        if result.first() is None:
            raise ConflictError("Follow", f"{actor_id}->{target_id}")
        await self.session.flush()
        return follow

    @translate_store_errors
    async def remove(
        self,
        actor_id: UserId,
        target_id: UUID,
        target_type: TargetType = TargetType.USER,
    ) -> None:
        """Delete a follow edge."""
        stmt = delete(follows_table).where(self._edge(actor_id, target_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundError("Follow", f"{actor_id}->{target_id}")

    @translate_store_errors
    async def count_for_target(
        self, target_id: UUID, target_type: TargetType = TargetType.USER
    ) -> int:
        """Count followers of a user."""
        stmt = (
            select(func.count())
            .select_from(follows_table)
            .where(follows_table.c.following_id == target_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @translate_store_errors
    async def count_by_actor(self, follower_id: UserId) -> int:
        """Count users followed by a user."""
        stmt = (
            select(func.count())
            .select_from(follows_table)
            .where(follows_table.c.follower_id == follower_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @translate_store_errors
    async def find_followers(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Follow]:
        """Find edges pointing at a user, newest first."""
        stmt = (
            select(follows_table)
            .where(follows_table.c.following_id == user_id)
            .order_by(desc(follows_table.c.created_at), follows_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_follow(row._asdict()) for row in result.fetchall()]

    @translate_store_errors
    async def find_following(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Follow]:
        """Find edges leaving a user, newest first."""
        stmt = (
            select(follows_table)
            .where(follows_table.c.follower_id == user_id)
            .order_by(desc(follows_table.c.created_at), follows_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_follow(row._asdict()) for row in result.fetchall()]

    @translate_store_errors
    async def find_followed_ids(
        self, follower_id: UserId, user_ids: Sequence[UserId]
    ) -> set[UserId]:
        """Find which of the given users a user follows (batch query)."""
        if not user_ids:
            return set()

        stmt = select(follows_table.c.following_id).where(
            and_(
                follows_table.c.follower_id == follower_id,
                follows_table.c.following_id.in_(user_ids),
            )
        )
        result = await self.session.execute(stmt)
        return {UserId(uid) for uid in result.scalars().all()}
