"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from agora.domain.model.comment import Comment
from agora.domain.value import CommentId, CommentSortOrder, CounterName, ProjectId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, active or tombstoned.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_for_share(
        self, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find an active comment and hold a shared lock on it.

        The lock lasts until the surrounding transaction ends and conflicts
        with a concurrent tombstone of the same row, so a reply and the
        deletion of its parent are applied one after the other.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found and active, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_id: CommentId,
        include_inactive: bool = False,
    ) -> List[Comment]:
        """Find direct child comments of a parent comment.

        Args:
            parent_id: The parent comment ID
            include_inactive: Whether to include tombstoned comments

        Returns:
            List of child comments, oldest first
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        project_id: ProjectId,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find active top-level comments of a project.

        Args:
            project_id: The project ID
            sort: RECENT (newest first) or MOST_LIKED (likes, then newest)
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments in the requested order
        """
        pass

    @abstractmethod
    async def count_top_level(self, project_id: ProjectId) -> int:
        """Count active top-level comments of a project."""
        pass

    @abstractmethod
    async def count_active_by_project(self, project_id: ProjectId) -> int:
        """Count active comments of a project at every depth."""
        pass

    @abstractmethod
    async def count_active_by_projects(self, project_ids: Sequence[ProjectId]) -> int:
        """Count active comments across several projects at every depth."""
        pass

    @abstractmethod
    async def count_active_children(
        self, parent_ids: Sequence[CommentId]
    ) -> Dict[CommentId, int]:
        """Count active direct children for several parents (batch query).

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Mapping of parent ID to active child count; every requested ID
            is present, with 0 when it has no active children
        """
        pass

    @abstractmethod
    async def find_child_ids(
        self, parent_ids: Sequence[CommentId], include_inactive: bool = False
    ) -> List[CommentId]:
        """Find IDs of direct children of several parents.

        Args:
            parent_ids: Parent comment IDs
            include_inactive: Whether to include tombstoned children

        Returns:
            IDs of children, in no particular order
        """
        pass

    @abstractmethod
    async def tombstone(
        self, comment_ids: Sequence[CommentId], content: str, at: datetime
    ) -> List[CommentId]:
        """Soft-delete the active comments among ``comment_ids``.

        Already-tombstoned comments are left untouched, so their original
        deletion timestamp survives a repeated delete.

        Args:
            comment_ids: Comments to tombstone
            content: Replacement text for the comment body
            at: Deletion timestamp written to ``updated_at``

        Returns:
            IDs of the comments that actually transitioned to tombstoned
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str, at: datetime
    ) -> Optional[Comment]:
        """Replace the content of an active comment and mark it edited.

        Args:
            comment_id: The comment ID
            content: New content
            at: Edit timestamp

        Returns:
            The updated comment, or None if missing or tombstoned
        """
        pass

    @abstractmethod
    async def adjust_counter(
        self, comment_id: CommentId, counter: CounterName, delta: int
    ) -> int:
        """Atomically add ``delta`` to a counter, clamped at zero.

        Args:
            comment_id: The comment's ID
            counter: LIKES or REPLIES
            delta: Amount to add (negative to subtract)

        Returns:
            The counter value after the update

        Raises:
            NotFoundError: If the comment does not exist
        """
        pass

    @abstractmethod
    async def set_counter(
        self, comment_id: CommentId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter (used by reconciliation)."""
        pass

    @abstractmethod
    async def find_ids(
        self, limit: int, after: Optional[CommentId] = None
    ) -> List[CommentId]:
        """List comment IDs in ascending order (keyset pagination)."""
        pass
