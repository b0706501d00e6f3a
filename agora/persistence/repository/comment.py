"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy import desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import NotFoundError
from agora.domain.model import Comment
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, CommentSortOrder, CounterName, ProjectId
from agora.persistence.error import translate_store_errors
from agora.persistence.mappers import comment_to_dict, counter_column, row_to_comment
from agora.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_store_errors
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @translate_store_errors
    async def find_active_for_share(
        self, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find an active comment, locking it FOR SHARE.

        A tombstone UPDATE on the row waits for this lock, and this read
        waits for an uncommitted tombstone, after which the row no longer
        matches ``is_active``.
        """
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_active.is_(True))
            .with_for_update(read=True)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @translate_store_errors
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = insert(comments_table).values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    @translate_store_errors
    async def find_children(
        self,
        parent_id: CommentId,
        include_inactive: bool = False,
    ) -> List[Comment]:
        """Find direct child comments of a parent comment."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)

        if not include_inactive:
            stmt = stmt.where(comments_table.c.is_active.is_(True))

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @translate_store_errors
    async def find_top_level(
        self,
        project_id: ProjectId,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active top-level comments of a project."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.project_id == project_id)
            .where(comments_table.c.parent_id.is_(None))
            .where(comments_table.c.is_active.is_(True))
        )

        if sort == CommentSortOrder.MOST_LIKED:
            stmt = stmt.order_by(
                desc(comments_table.c.likes_count), desc(comments_table.c.created_at)
            )
        else:
            stmt = stmt.order_by(desc(comments_table.c.created_at))

        stmt = stmt.limit(limit).offset(offset)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @translate_store_errors
    async def count_top_level(self, project_id: ProjectId) -> int:
        """Count active top-level comments of a project."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.project_id == project_id)
            .where(comments_table.c.parent_id.is_(None))
            .where(comments_table.c.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @translate_store_errors
    async def count_active_by_project(self, project_id: ProjectId) -> int:
        """Count active comments of a project at every depth."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.project_id == project_id)
            .where(comments_table.c.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @translate_store_errors
    async def count_active_by_projects(self, project_ids: Sequence[ProjectId]) -> int:
        """Count active comments across several projects."""
        if not project_ids:
            return 0

        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.project_id.in_(project_ids))
            .where(comments_table.c.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @translate_store_errors
    async def count_active_children(
        self, parent_ids: Sequence[CommentId]
    ) -> Dict[CommentId, int]:
        """Count active direct children for several parents."""
        counts: Dict[CommentId, int] = {pid: 0 for pid in parent_ids}
        if not parent_ids:
            return counts

        stmt = (
            select(comments_table.c.parent_id, func.count())
            .where(comments_table.c.parent_id.in_(parent_ids))
            .where(comments_table.c.is_active.is_(True))
            .group_by(comments_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        for parent_id, count in result.fetchall():
            counts[CommentId(parent_id)] = count
        return counts

    @translate_store_errors
    async def find_child_ids(
        self, parent_ids: Sequence[CommentId], include_inactive: bool = False
    ) -> List[CommentId]:
        """Find IDs of direct children of several parents."""
        if not parent_ids:
            return []

        stmt = select(comments_table.c.id).where(
            comments_table.c.parent_id.in_(parent_ids)
        )
        if not include_inactive:
            stmt = stmt.where(comments_table.c.is_active.is_(True))
        result = await self.session.execute(stmt)
        return [CommentId(cid) for cid in result.scalars().all()]

    @translate_store_errors
    async def tombstone(
        self, comment_ids: Sequence[CommentId], content: str, at: datetime
    ) -> List[CommentId]:
        """Soft-delete the active comments among ``comment_ids``."""
        if not comment_ids:
            return []

        # The is_active guard makes concurrent deletes of one subtree disjoint
        stmt = (
            update(comments_table)
            .where(comments_table.c.id.in_(comment_ids))
            .where(comments_table.c.is_active.is_(True))
            .values(is_active=False, content=content, updated_at=at)
            .returning(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        transitioned = [CommentId(cid) for cid in result.scalars().all()]
        await self.session.flush()
        return transitioned

    @translate_store_errors
    async def update_content(
        self, comment_id: CommentId, content: str, at: datetime
    ) -> Optional[Comment]:
        """Replace the content of an active comment and mark it edited."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_active.is_(True))
            .values(
                content=content,
                is_edited=True,
                edited_at=at,
                updated_at=at,
            )
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            # Comment not found or tombstoned
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    @translate_store_errors
    async def adjust_counter(
        self, comment_id: CommentId, counter: CounterName, delta: int
    ) -> int:
        """Atomically add ``delta`` to a counter (minimum 0)."""
        column = comments_table.c[counter_column(counter)]
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values({column.key: func.greatest(column + delta, 0)})
            .returning(column)
        )
        result = await self.session.execute(stmt)
        value = result.scalar_one_or_none()
        await self.session.flush()
        if value is None:
            raise NotFoundError("Comment", str(comment_id))
        return value

    @translate_store_errors
    async def set_counter(
        self, comment_id: CommentId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values({counter_column(counter): value})
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @translate_store_errors
    async def find_ids(
        self, limit: int, after: Optional[CommentId] = None
    ) -> List[CommentId]:
        """List comment IDs in ascending order."""
        stmt = select(comments_table.c.id).order_by(comments_table.c.id).limit(limit)
        if after is not None:
            stmt = stmt.where(comments_table.c.id > after)
        result = await self.session.execute(stmt)
        return [CommentId(cid) for cid in result.scalars().all()]
