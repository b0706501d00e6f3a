"""Comment thread service.

Owns the structural rules of threaded discussion: bounded depth, content
normalization, author-only edits, and cascading soft-deletion.

Deletion tombstones rather than removes, so a child's ``parent_id`` always
resolves. The cascade decrements only the direct parent's reply counter;
counters inside the deleted subtree keep their historical values.
"""

import re
from datetime import datetime
from typing import AsyncIterator, Iterable, Optional, Sequence
from uuid import uuid4

import logfire
from pydantic import computed_field

from agora.config import PaginationSettings, ThreadSettings
from agora.domain.error import (
    DepthExceededError,
    ForbiddenError,
    NotAuthorizedError,
    NotFoundError,
    ParentNotFoundError,
    ParentWrongProjectError,
    ValidationFailedError,
)
from agora.domain.model.comment import Comment
from agora.domain.repository import CommentRepository
from agora.domain.value import (
    CommentId,
    CommentSortOrder,
    CounterName,
    ProjectId,
    TargetType,
    UserId,
)
from agora.domain.value.common import ValueObject

from .base import Service
from .counter_service import CounterService
from .paging import has_more, resolve_page_size
from .project_service import ProjectService

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class CommentPage(ValueObject):
    """One page of active top-level comments."""

    items: list[Comment]
    reply_counts: dict[CommentId, int]
    total: int
    page: int
    page_size: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return has_more(self.page, self.page_size, self.total)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_prev_page(self) -> bool:
        return self.page > 1


class DeletionResult(ValueObject):
    """Outcome of a soft-delete."""

    comment_id: CommentId
    tombstoned: int


class CommentService(Service):
    """Domain service for comment thread operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        project_service: ProjectService,
        counter_service: CounterService,
        thread_settings: ThreadSettings,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            project_service: Project domain service
            counter_service: Counter synchronization service
            thread_settings: Depth and content limits
            pagination_settings: Listing page sizes
        """
        self.comment_repository = comment_repository
        self.project_service = project_service
        self.counter_service = counter_service
        self.settings = thread_settings
        self.pagination = pagination_settings

    def normalize_content(self, content: str) -> str:
        """Trim content, check its length, then collapse runs of blank lines.

        Args:
            content: Raw content as submitted

        Returns:
            Normalized content

        Raises:
            ValidationFailedError: If the trimmed length is out of bounds
        """
        trimmed = content.strip()
        if not (
            self.settings.min_content_length
            <= len(trimmed)
            <= self.settings.max_content_length
        ):
            raise ValidationFailedError(
                f"Comment must be between {self.settings.min_content_length} and "
                f"{self.settings.max_content_length} characters"
            )
        return _EXCESS_NEWLINES.sub("\n\n", trimmed)

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID, active or tombstoned."""
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            return await self.comment_repository.find_by_id(comment_id)

    async def get_active_comment(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID unless it is missing or tombstoned."""
        comment = await self.get_comment_by_id(comment_id)
        if comment is None or not comment.is_active:
            return None
        return comment

    async def create_comment(
        self,
        actor_id: UserId,
        project_id: ProjectId,
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a project or a reply to another comment.

        Args:
            actor_id: Author user ID
            project_id: Project ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the project does not exist
            ValidationFailedError: If the content length is out of bounds
            ParentNotFoundError: If the parent is missing or deleted, including
                a parent deleted while the reply was being written
            ParentWrongProjectError: If the parent belongs to another project
            DepthExceededError: If the reply would nest too deep
        """
        with logfire.span(
            "comment_service.create_comment",
            project_id=str(project_id),
            author_id=str(actor_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            project = await self.project_service.get_project_by_id(project_id)
            if not project:
                raise NotFoundError("Project", str(project_id))

            normalized = self.normalize_content(content)

            depth = 0
            if parent_id:
                # Held until commit, so a delete of the parent cannot interleave
                parent = await self.comment_repository.find_active_for_share(parent_id)
                if not parent:
                    logfire.warn(
                        "Reply to missing or deleted parent",
                        parent_id=str(parent_id),
                        project_id=str(project_id),
                    )
                    raise ParentNotFoundError(str(parent_id))
                if parent.project_id != project_id:
                    logfire.warn(
                        "Parent comment belongs to another project",
                        parent_id=str(parent_id),
                        parent_project_id=str(parent.project_id),
                        target_project_id=str(project_id),
                    )
                    raise ParentWrongProjectError(str(parent_id), str(project_id))
                depth = parent.depth + 1
                if depth > self.settings.max_depth:
                    logfire.warn(
                        "Reply exceeds maximum depth",
                        parent_id=str(parent_id),
                        depth=depth,
                        max_depth=self.settings.max_depth,
                    )
                    raise DepthExceededError(depth, self.settings.max_depth)

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                project_id=project_id,
                author_id=actor_id,
                content=normalized,
                parent_id=parent_id,
                depth=depth,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(comment)

            await self.counter_service.adjust(
                project_id, TargetType.PROJECT, CounterName.COMMENTS, 1
            )
            if parent_id:
                await self.counter_service.adjust(
                    parent_id, TargetType.COMMENT, CounterName.REPLIES, 1
                )
                await self._reject_if_parent_deleted(saved, parent_id)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                project_id=str(project_id),
                depth=depth,
            )
            return saved

    async def _reject_if_parent_deleted(
        self, reply: Comment, parent_id: CommentId
    ) -> None:
        """Undo a reply whose parent was deleted while it was being written.

        A cascade that has already passed the parent would otherwise leave
        this reply active under a tombstone.
        """
        if await self.get_active_comment(parent_id):
            return

        logfire.warn(
            "Parent deleted during reply, rolling back",
            comment_id=str(reply.id),
            parent_id=str(parent_id),
        )
        transitioned = await self.comment_repository.tombstone(
            [reply.id], self.settings.tombstone_text, datetime.now()
        )
        await self.counter_service.adjust(
            parent_id, TargetType.COMMENT, CounterName.REPLIES, -1
        )
        # A cascade that tombstoned the reply already took it off the project
        if transitioned:
            await self.counter_service.adjust(
                reply.project_id, TargetType.PROJECT, CounterName.COMMENTS, -1
            )
        raise ParentNotFoundError(str(parent_id))

    async def edit_comment(
        self, actor_id: UserId, comment_id: CommentId, content: str
    ) -> Comment:
        """Replace the content of a comment.

        Args:
            actor_id: The acting user
            comment_id: Comment ID
            content: New content

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment is missing or deleted
            NotAuthorizedError: If the actor is not the author
            ValidationFailedError: If the content length is out of bounds
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            actor_id=str(actor_id),
        ):
            comment = await self.get_active_comment(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != actor_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    actor_id=str(actor_id),
                    author_id=str(comment.author_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(actor_id))

            normalized = self.normalize_content(content)
            updated = await self.comment_repository.update_content(
                comment_id, normalized, datetime.now()
            )
            if updated is None:
                # Deleted between the read and the write
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment edited",
                comment_id=str(comment_id),
                content_length=len(normalized),
            )
            return updated

    async def delete_comment(
        self, actor_id: UserId, comment_id: CommentId, is_moderator: bool = False
    ) -> DeletionResult:
        """Soft-delete a comment and its whole subtree.

        The target is tombstoned first, then every descendant is visited
        breadth-first through the parent index and tombstoned if still
        active. Comments already tombstoned are skipped, so repeating a
        delete that failed midway finishes the cascade.

        Args:
            actor_id: The acting user
            comment_id: Comment ID
            is_moderator: Whether the authorization gate granted moderation
                rights over this comment

        Returns:
            The number of comments this call tombstoned

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the actor is neither author nor moderator
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            actor_id=str(actor_id),
            is_moderator=is_moderator,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != actor_id and not is_moderator:
                logfire.warn(
                    "Forbidden comment delete attempt",
                    comment_id=str(comment_id),
                    actor_id=str(actor_id),
                )
                raise ForbiddenError("delete", "comment", str(comment_id), str(actor_id))

            now = datetime.now()
            tombstoned = 0

            if await self.comment_repository.tombstone(
                [comment.id], self.settings.tombstone_text, now
            ):
                tombstoned += 1
                if comment.parent_id and await self.get_active_comment(
                    comment.parent_id
                ):
                    # Reply counts of tombstoned parents are historical
                    await self.counter_service.adjust(
                        comment.parent_id, TargetType.COMMENT, CounterName.REPLIES, -1
                    )

            visited, cascaded = await self._cascade([comment.id], now)
            tombstoned += cascaded

            # Replies written while the cascade ran
            while True:
                stragglers = await self.comment_repository.find_child_ids(list(visited))
                if not stragglers:
                    break
                tombstoned += len(
                    await self.comment_repository.tombstone(
                        stragglers, self.settings.tombstone_text, now
                    )
                )
                more_visited, cascaded = await self._cascade(stragglers, now)
                visited |= more_visited
                tombstoned += cascaded

            if tombstoned:
                await self.counter_service.adjust(
                    comment.project_id,
                    TargetType.PROJECT,
                    CounterName.COMMENTS,
                    -tombstoned,
                )

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                tombstoned=tombstoned,
                visited=len(visited),
            )
            return DeletionResult(comment_id=comment_id, tombstoned=tombstoned)

    async def _cascade(
        self, roots: Iterable[CommentId], at: datetime
    ) -> tuple[set[CommentId], int]:
        """Tombstone every active descendant of ``roots``, level by level.

        Tombstoned nodes are walked through as well, since a previous
        partial delete may have left active comments beneath them.

        Returns:
            Tuple of (every node visited including roots, number tombstoned)
        """
        visited: set[CommentId] = set(roots)
        frontier = list(visited)
        tombstoned = 0
        while frontier:
            children = await self.comment_repository.find_child_ids(
                frontier, include_inactive=True
            )
            children = [c for c in children if c not in visited]
            if not children:
                break
            tombstoned += len(
                await self.comment_repository.tombstone(
                    children, self.settings.tombstone_text, at
                )
            )
            visited.update(children)
            frontier = children
        return visited, tombstoned

    async def list_comments(
        self,
        project_id: ProjectId,
        page: int = 1,
        page_size: Optional[int] = None,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
    ) -> CommentPage:
        """List active top-level comments of a project.

        Reply counts are recomputed from live rows rather than read from
        the stored counters.

        Args:
            project_id: Project ID
            page: 1-based page number
            page_size: Comments per page (defaults to the configured size)
            sort: RECENT or MOST_LIKED

        Returns:
            A page of comments with totals and paging flags

        Raises:
            NotFoundError: If the project does not exist
            ValidationFailedError: If paging parameters are out of range
        """
        size = resolve_page_size(page, page_size, self.pagination)
        with logfire.span(
            "comment_service.list_comments",
            project_id=str(project_id),
            page=page,
            page_size=size,
            sort=sort.value,
        ):
            project = await self.project_service.get_project_by_id(project_id)
            if not project:
                raise NotFoundError("Project", str(project_id))

            items = await self.comment_repository.find_top_level(
                project_id, sort=sort, limit=size, offset=(page - 1) * size
            )
            total = await self.comment_repository.count_top_level(project_id)
            reply_counts = await self.live_reply_counts([c.id for c in items])
            return CommentPage(
                items=items,
                reply_counts=reply_counts,
                total=total,
                page=page,
                page_size=size,
            )

    async def iter_comments(
        self,
        project_id: ProjectId,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        page_size: Optional[int] = None,
    ) -> AsyncIterator[Comment]:
        """Walk all active top-level comments of a project page by page.

        Each call starts again from the first page.
        """
        page = 1
        while True:
            listing = await self.list_comments(project_id, page, page_size, sort)
            for comment in listing.items:
                yield comment
            if not listing.has_next_page:
                break
            page += 1

    async def live_reply_counts(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count active direct replies from the rows, not the stored counters."""
        return await self.comment_repository.count_active_children(comment_ids)

    async def list_replies(self, comment_id: CommentId) -> list[Comment]:
        """List active direct replies of a comment, oldest first.

        Raises:
            NotFoundError: If the comment is missing or deleted
        """
        with logfire.span("comment_service.list_replies", comment_id=str(comment_id)):
            parent = await self.get_active_comment(comment_id)
            if not parent:
                raise NotFoundError("Comment", str(comment_id))
            return await self.comment_repository.find_children(comment_id)
