"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from agora.domain.error import NotFoundError
from agora.domain.model.comment import Comment
from agora.domain.repository.comment import CommentRepository
from agora.domain.value import CommentId, CommentSortOrder, CounterName, ProjectId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        # Insertion sequence breaks created_at ties deterministically
        self._sequence: dict[CommentId, int] = {}

    def _chronological(self, comments: list[Comment]) -> list[Comment]:
        return sorted(comments, key=lambda c: (c.created_at, self._sequence[c.id]))

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_active_for_share(
        self, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find an active comment. Coroutines never interleave inside a call."""
        comment = self._comments.get(comment_id)
        if comment is None or not comment.is_active:
            return None
        return comment

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        self._sequence.setdefault(comment.id, len(self._sequence))
        self._comments[comment.id] = comment
        return comment

    async def find_children(
        self,
        parent_id: CommentId,
        include_inactive: bool = False,
    ) -> list[Comment]:
        """Find direct children of a comment."""
        comments = [c for c in self._comments.values() if c.parent_id == parent_id]

        if not include_inactive:
            comments = [c for c in comments if c.is_active]

        return self._chronological(comments)

    async def find_top_level(
        self,
        project_id: ProjectId,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find active top-level comments of a project."""
        comments = [
            c
            for c in self._comments.values()
            if c.project_id == project_id and c.parent_id is None and c.is_active
        ]

        # Newest first, then (stable) by likes for MOST_LIKED
        comments = list(reversed(self._chronological(comments)))
        if sort == CommentSortOrder.MOST_LIKED:
            comments.sort(key=lambda c: c.stats.likes, reverse=True)

        return comments[offset : offset + limit]

    async def count_top_level(self, project_id: ProjectId) -> int:
        """Count active top-level comments of a project."""
        return sum(
            1
            for c in self._comments.values()
            if c.project_id == project_id and c.parent_id is None and c.is_active
        )

    async def count_active_by_project(self, project_id: ProjectId) -> int:
        """Count active comments of a project at every depth."""
        return sum(
            1
            for c in self._comments.values()
            if c.project_id == project_id and c.is_active
        )

    async def count_active_by_projects(self, project_ids: Sequence[ProjectId]) -> int:
        """Count active comments across several projects."""
        wanted = set(project_ids)
        return sum(
            1 for c in self._comments.values() if c.project_id in wanted and c.is_active
        )

    async def count_active_children(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count active direct children for several parents."""
        counts = {pid: 0 for pid in parent_ids}
        for c in self._comments.values():
            if c.is_active and c.parent_id in counts:
                counts[c.parent_id] += 1
        return counts

    async def find_child_ids(
        self, parent_ids: Sequence[CommentId], include_inactive: bool = False
    ) -> list[CommentId]:
        """Find IDs of direct children of several parents."""
        wanted = set(parent_ids)
        return [
            c.id
            for c in self._comments.values()
            if c.parent_id in wanted and (include_inactive or c.is_active)
        ]

    async def tombstone(
        self, comment_ids: Sequence[CommentId], content: str, at: datetime
    ) -> list[CommentId]:
        """Soft-delete the active comments among ``comment_ids``."""
        transitioned: list[CommentId] = []
        for comment_id in comment_ids:
            comment = self._comments.get(comment_id)
            if comment is None or not comment.is_active:
                continue
            self._comments[comment_id] = comment.model_copy(
                update={"is_active": False, "content": content, "updated_at": at}
            )
            transitioned.append(comment_id)
        return transitioned

    async def update_content(
        self, comment_id: CommentId, content: str, at: datetime
    ) -> Optional[Comment]:
        """Replace the content of an active comment and mark it edited."""
        comment = self._comments.get(comment_id)
        if comment is None or not comment.is_active:
            return None

        updated = comment.model_copy(
            update={
                "content": content,
                "is_edited": True,
                "edited_at": at,
                "updated_at": at,
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def adjust_counter(
        self, comment_id: CommentId, counter: CounterName, delta: int
    ) -> int:
        """Add ``delta`` to a counter (minimum 0)."""
        comment = self._comments.get(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))

        value = max(getattr(comment.stats, counter.value) + delta, 0)
        self._comments[comment_id] = comment.model_copy(
            update={"stats": comment.stats.model_copy(update={counter.value: value})}
        )
        return value

    async def set_counter(
        self, comment_id: CommentId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return
        self._comments[comment_id] = comment.model_copy(
            update={"stats": comment.stats.model_copy(update={counter.value: value})}
        )

    async def find_ids(
        self, limit: int, after: Optional[CommentId] = None
    ) -> list[CommentId]:
        """List comment IDs in ascending order."""
        ids = sorted(self._comments)
        if after is not None:
            ids = [cid for cid in ids if cid > after]
        return ids[:limit]
