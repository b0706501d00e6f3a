"""PostgreSQL implementation of Like repository."""

from datetime import datetime
from typing import Sequence
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import ConflictError, NotFoundError
from agora.domain.model import Like
from agora.domain.repository import LikeRepository
from agora.domain.value import LikeId, TargetType, UserId
from agora.persistence.error import translate_store_errors
from agora.persistence.mappers import like_to_dict
from agora.persistence.tables import likes_table


def _tuple_filter(user_id: UserId, target_id: UUID, target_type: TargetType):
    return and_(
        likes_table.c.user_id == user_id,
        likes_table.c.target_id == target_id,
        likes_table.c.target_type == target_type.value,
    )


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_store_errors
    async def exists(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> bool:
        """Check whether the user has liked the target."""
        stmt = select(likes_table.c.id).where(
            _tuple_filter(actor_id, target_id, target_type)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    @translate_store_errors
    async def insert(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> Like:
        """Insert a like; the unique constraint decides conflicts."""
        like = Like(
            id=LikeId(uuid4()),
            user_id=actor_id,
            target_id=target_id,
            target_type=target_type,
            created_at=datetime.now(),
        )
        # ON CONFLICT keeps the transaction usable when the tuple exists
        stmt = (
            insert(likes_table)
            .values(**like_to_dict(like))
            .on_conflict_do_nothing(constraint="uq_like")
            .returning(likes_table.c.id)
        )
        result = await self.session.execute(stmt)
        if result.first() is None:
            raise ConflictError("Like", f"{actor_id}:{target_type.value}:{target_id}")
        await self.session.flush()
        return like

    @translate_store_errors
    async def remove(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> None:
        """Delete a like."""
        stmt = delete(likes_table).where(
            _tuple_filter(actor_id, target_id, target_type)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundError("Like", f"{actor_id}:{target_type.value}:{target_id}")

    @translate_store_errors
    async def count_for_target(self, target_id: UUID, target_type: TargetType) -> int:
        """Count likes on a target."""
        stmt = (
            select(func.count())
            .select_from(likes_table)
            .where(likes_table.c.target_id == target_id)
            .where(likes_table.c.target_type == target_type.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @translate_store_errors
    async def find_liked_target_ids(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """Find which of the given targets a user has liked (batch query)."""
        if not target_ids:
            return set()

        stmt = select(likes_table.c.target_id).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.target_type == target_type.value,
                likes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    @translate_store_errors
    async def count_for_targets(
        self, target_ids: Sequence[UUID], target_type: TargetType
    ) -> int:
        """Count likes across several targets of one kind."""
        if not target_ids:
            return 0

        stmt = (
            select(func.count())
            .select_from(likes_table)
            .where(likes_table.c.target_id.in_(target_ids))
            .where(likes_table.c.target_type == target_type.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
