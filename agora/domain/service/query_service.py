"""Read-side projections for interaction views.

Nothing here writes. Listings combine comments with author summaries,
live reply counts and the viewer's own likes; follow views combine edges
with user summaries and whether the viewer follows each listed user.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

import logfire
from pydantic import computed_field

from agora.config import PaginationSettings
from agora.domain.error import NotFoundError
from agora.domain.model.comment import Comment
from agora.domain.model.follow import Follow
from agora.domain.repository import (
    CommentRepository,
    FollowRepository,
    LikeRepository,
    ProjectRepository,
)
from agora.domain.value import (
    CommentId,
    CommentSortOrder,
    CounterName,
    FollowStatus,
    ProjectId,
    TargetType,
    UserId,
)
from agora.domain.value.common import ValueObject

from .actor_directory import ActorDirectory, ActorSummary
from .base import Service
from .comment_service import CommentService
from .counter_service import CounterService
from .paging import has_more, resolve_page_size
from .user_service import UserService


class CommentView(ValueObject):
    """A comment as shown to a viewer."""

    id: CommentId
    project_id: ProjectId
    parent_id: Optional[CommentId]
    depth: int
    content: str
    author: Optional[ActorSummary]
    likes_count: int
    replies_count: int
    has_liked: bool
    is_edited: bool
    edited_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class CommentListing(ValueObject):
    """A page of comment views."""

    items: list[CommentView]
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


class CommentThreadView(ValueObject):
    """A single comment with its active direct replies."""

    comment: CommentView
    replies: list[CommentView]


class UserStatsView(ValueObject):
    """Interaction totals for one user, counted from the rows.

    ``likes_received`` and ``comments_received`` cover the projects the user
    owns; comments count at every depth, active only.
    """

    user_id: UserId
    projects: int
    likes_received: int
    comments_received: int
    followers: int
    following: int


class FollowEntry(ValueObject):
    """A user in a follower/following listing."""

    user: ActorSummary
    followed_at: datetime
    is_followed_by_viewer: bool


class FollowListing(ValueObject):
    """A page of follow entries."""

    items: list[FollowEntry]
    total: int
    page: int
    page_size: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return has_more(self.page, self.page_size, self.total)


class QueryService(Service):
    """Domain service assembling read models."""

    def __init__(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        user_service: UserService,
        like_repository: LikeRepository,
        project_repository: ProjectRepository,
        comment_repository: CommentRepository,
        follow_repository: FollowRepository,
        actor_directory: ActorDirectory,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize query service.

        Args:
            comment_service: Comment thread service
            counter_service: Counter synchronization service
            user_service: User domain service
            like_repository: Like repository
            project_repository: Project repository
            comment_repository: Comment repository
            follow_repository: Follow repository
            actor_directory: Resolves author summaries
            pagination_settings: Listing page sizes
        """
        self.comment_service = comment_service
        self.counter_service = counter_service
        self.user_service = user_service
        self.like_repository = like_repository
        self.project_repository = project_repository
        self.comment_repository = comment_repository
        self.follow_repository = follow_repository
        self.actor_directory = actor_directory
        self.pagination = pagination_settings

    async def _views(
        self,
        comments: Sequence[Comment],
        reply_counts: dict[CommentId, int],
        viewer_id: Optional[UserId],
    ) -> list[CommentView]:
        """Decorate comments with authors, reply counts and viewer likes."""
        authors = await self.actor_directory.resolve([c.author_id for c in comments])
        liked: set[UUID] = set()
        if viewer_id is not None and comments:
            liked = await self.like_repository.find_liked_target_ids(
                viewer_id, TargetType.COMMENT, [c.id for c in comments]
            )

        return [
            CommentView(
                id=c.id,
                project_id=c.project_id,
                parent_id=c.parent_id,
                depth=c.depth,
                content=c.content,
                author=authors.get(c.author_id),
                likes_count=c.stats.likes,
                replies_count=reply_counts.get(c.id, 0),
                has_liked=c.id in liked,
                is_edited=c.is_edited,
                edited_at=c.edited_at,
                created_at=c.created_at,
                updated_at=c.updated_at,
            )
            for c in comments
        ]

    async def comment_listing(
        self,
        project_id: ProjectId,
        page: int = 1,
        page_size: Optional[int] = None,
        sort: CommentSortOrder = CommentSortOrder.RECENT,
        viewer_id: Optional[UserId] = None,
    ) -> CommentListing:
        """Build a page of top-level comments for a viewer.

        Args:
            project_id: Project ID
            page: 1-based page number
            page_size: Comments per page
            sort: RECENT or MOST_LIKED
            viewer_id: The viewing user, if any

        Returns:
            Comment listing with paging flags

        Raises:
            NotFoundError: If the project does not exist
            ValidationFailedError: If paging parameters are out of range
        """
        with logfire.span(
            "query_service.comment_listing",
            project_id=str(project_id),
            page=page,
            sort=sort.value,
        ):
            comment_page = await self.comment_service.list_comments(
                project_id, page, page_size, sort
            )
            items = await self._views(
                comment_page.items, comment_page.reply_counts, viewer_id
            )
            return CommentListing(
                items=items,
                total=comment_page.total,
                page=comment_page.page,
                page_size=comment_page.page_size,
            )

    async def reply_listing(
        self, comment_id: CommentId, viewer_id: Optional[UserId] = None
    ) -> list[CommentView]:
        """Build the direct replies of a comment for a viewer, oldest first.

        Raises:
            NotFoundError: If the comment is missing or deleted
        """
        with logfire.span("query_service.reply_listing", comment_id=str(comment_id)):
            replies = await self.comment_service.list_replies(comment_id)
            reply_counts = await self.comment_service.live_reply_counts(
                [r.id for r in replies]
            )
            return await self._views(replies, reply_counts, viewer_id)

    async def comment_thread(
        self,
        project_id: ProjectId,
        comment_id: CommentId,
        viewer_id: Optional[UserId] = None,
    ) -> CommentThreadView:
        """Build one active comment and its direct replies for a viewer.

        Args:
            project_id: Project the comment must belong to
            comment_id: Comment ID
            viewer_id: The viewing user, if any

        Returns:
            The comment view with its reply views, oldest reply first

        Raises:
            NotFoundError: If the comment is missing, deleted or on another
                project
        """
        with logfire.span(
            "query_service.comment_thread",
            project_id=str(project_id),
            comment_id=str(comment_id),
        ):
            comment = await self.comment_service.get_active_comment(comment_id)
            if not comment or comment.project_id != project_id:
                raise NotFoundError("Comment", str(comment_id))

            replies = await self.comment_repository.find_children(comment_id)
            reply_counts = await self.comment_service.live_reply_counts(
                [comment_id, *(r.id for r in replies)]
            )
            views = await self._views([comment, *replies], reply_counts, viewer_id)
            return CommentThreadView(comment=views[0], replies=views[1:])

    async def counts(
        self, target_id: UUID, target_type: TargetType
    ) -> dict[CounterName, int]:
        """Read the stored counters of an entity."""
        return await self.counter_service.get_counts(target_id, target_type)

    async def follow_status(self, viewer_id: UserId, other_id: UserId) -> FollowStatus:
        """Describe the follow relationship between two users.

        Raises:
            NotFoundError: If the other user does not exist
        """
        with logfire.span(
            "query_service.follow_status",
            viewer_id=str(viewer_id),
            other_id=str(other_id),
        ):
            if not await self.user_service.get_user_by_id(other_id):
                raise NotFoundError("User", str(other_id))
            if viewer_id == other_id:
                return FollowStatus.NONE

            following = await self.follow_repository.exists(
                viewer_id, other_id, TargetType.USER
            )
            followed_by = await self.follow_repository.exists(
                other_id, viewer_id, TargetType.USER
            )
            if following and followed_by:
                return FollowStatus.MUTUAL
            if following:
                return FollowStatus.FOLLOWING
            if followed_by:
                return FollowStatus.FOLLOWED_BY
            return FollowStatus.NONE

    async def followers(
        self,
        user_id: UserId,
        page: int = 1,
        page_size: Optional[int] = None,
        viewer_id: Optional[UserId] = None,
    ) -> FollowListing:
        """List the users following ``user_id``, newest edge first."""
        with logfire.span("query_service.followers", user_id=str(user_id), page=page):
            size = resolve_page_size(page, page_size, self.pagination)
            await self._require_user(user_id)
            edges = await self.follow_repository.find_followers(
                user_id, limit=size, offset=(page - 1) * size
            )
            total = await self.follow_repository.count_for_target(
                user_id, TargetType.USER
            )
            items = await self._follow_entries(
                edges, [e.follower_id for e in edges], viewer_id
            )
            return FollowListing(items=items, total=total, page=page, page_size=size)

    async def following(
        self,
        user_id: UserId,
        page: int = 1,
        page_size: Optional[int] = None,
        viewer_id: Optional[UserId] = None,
    ) -> FollowListing:
        """List the users ``user_id`` follows, newest edge first."""
        with logfire.span("query_service.following", user_id=str(user_id), page=page):
            size = resolve_page_size(page, page_size, self.pagination)
            await self._require_user(user_id)
            edges = await self.follow_repository.find_following(
                user_id, limit=size, offset=(page - 1) * size
            )
            total = await self.follow_repository.count_by_actor(user_id)
            items = await self._follow_entries(
                edges, [e.following_id for e in edges], viewer_id
            )
            return FollowListing(items=items, total=total, page=page, page_size=size)

    async def user_stats(self, user_id: UserId) -> UserStatsView:
        """Count a user's interaction totals from the rows.

        Stored counters are not consulted, so the totals stay correct even
        when the counters have drifted.

        Raises:
            NotFoundError: If the user does not exist
        """
        with logfire.span("query_service.user_stats", user_id=str(user_id)):
            await self._require_user(user_id)
            project_ids = await self.project_repository.find_ids_by_owner(user_id)
            likes = await self.like_repository.count_for_targets(
                project_ids, TargetType.PROJECT
            )
            comments = await self.comment_repository.count_active_by_projects(
                project_ids
            )
            followers = await self.follow_repository.count_for_target(
                user_id, TargetType.USER
            )
            return UserStatsView(
                user_id=user_id,
                projects=len(project_ids),
                likes_received=likes,
                comments_received=comments,
                followers=followers,
                following=await self.follow_repository.count_by_actor(user_id),
            )

    async def _require_user(self, user_id: UserId) -> None:
        if not await self.user_service.get_user_by_id(user_id):
            raise NotFoundError("User", str(user_id))

    async def _follow_entries(
        self,
        edges: Sequence[Follow],
        listed_ids: list[UserId],
        viewer_id: Optional[UserId],
    ) -> list[FollowEntry]:
        summaries = await self.actor_directory.resolve(listed_ids)
        followed: set[UserId] = set()
        if viewer_id is not None:
            followed = await self.follow_repository.find_followed_ids(
                viewer_id, listed_ids
            )

        entries = []
        for edge, listed_id in zip(edges, listed_ids):
            summary = summaries.get(listed_id)
            if summary is None:
                # Account removed upstream after the edge was written
                continue
            entries.append(
                FollowEntry(
                    user=summary,
                    followed_at=edge.created_at,
                    is_followed_by_viewer=listed_id in followed,
                )
            )
        return entries
