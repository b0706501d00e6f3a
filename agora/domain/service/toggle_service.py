"""Idempotent like/follow toggles.

A toggle never reads before it writes. It tries to insert the relationship
and lets the storage uniqueness constraint decide: a conflict means the
relationship already existed, so the toggle removes it instead. If that
remove finds nothing, another request removed the row in between and the
toggle starts over.
"""

from typing import Awaitable, Callable
from uuid import UUID

import logfire

from agora.domain.error import (
    ConflictError,
    InvalidTargetError,
    NotFoundError,
    StoreUnavailableError,
    ValidationFailedError,
)
from agora.domain.repository import FollowRepository, LikeRepository
from agora.domain.repository.relationship import RelationshipRepository
from agora.domain.value import (
    CommentId,
    CounterName,
    ProjectId,
    TargetType,
    UserId,
)
from agora.domain.value.common import ValueObject

from .base import Service
from .comment_service import CommentService
from .counter_service import CounterService
from .project_service import ProjectService
from .user_service import UserService


class ToggleResult(ValueObject):
    """State of a like after a toggle."""

    active: bool
    count: int


class FollowToggleResult(ValueObject):
    """State of a follow edge after a toggle."""

    active: bool
    followers_count: int
    following_count: int


class ToggleService(Service):
    """Domain service for like and follow toggles."""

    def __init__(
        self,
        like_repository: LikeRepository,
        follow_repository: FollowRepository,
        counter_service: CounterService,
        project_service: ProjectService,
        user_service: UserService,
        comment_service: CommentService,
        max_attempts: int = 3,
    ) -> None:
        """Initialize toggle service.

        Args:
            like_repository: Like repository
            follow_repository: Follow repository
            counter_service: Counter synchronization service
            project_service: Project domain service
            user_service: User domain service
            comment_service: Comment thread service
            max_attempts: Insert/remove rounds before giving up
        """
        self.like_repository = like_repository
        self.follow_repository = follow_repository
        self.counter_service = counter_service
        self.project_service = project_service
        self.user_service = user_service
        self.comment_service = comment_service
        self.max_attempts = max_attempts

    async def toggle_like(
        self, actor_id: UserId, target_id: UUID, target_type: TargetType
    ) -> ToggleResult:
        """Like the target if not yet liked, otherwise unlike it.

        Args:
            actor_id: The acting user
            target_id: Project or comment ID
            target_type: PROJECT or COMMENT

        Returns:
            Whether the like now exists and the target's stored like count

        Raises:
            ValidationFailedError: If the target type cannot be liked
            NotFoundError: If the target does not exist or is deleted
            StoreUnavailableError: If the toggle kept losing races, or on
                storage failure
        """
        with logfire.span(
            "toggle_service.toggle_like",
            actor_id=str(actor_id),
            target_id=str(target_id),
            target_type=target_type.value,
        ):
            if not target_type.likeable:
                raise ValidationFailedError(
                    f"Cannot like a target of type {target_type.value}"
                )
            await self._require_likeable_target(target_id, target_type)

            async def on_change(delta: int) -> ToggleResult:
                count = await self.counter_service.adjust(
                    target_id, target_type, CounterName.LIKES, delta
                )
                return ToggleResult(active=delta > 0, count=count)

            result = await self._toggle(
                self.like_repository, actor_id, target_id, target_type, on_change
            )
            logfire.info(
                "Like toggled",
                actor_id=str(actor_id),
                target_id=str(target_id),
                target_type=target_type.value,
                liked=result.active,
                count=result.count,
            )
            return result

    async def toggle_follow(
        self, actor_id: UserId, target_user_id: UserId
    ) -> FollowToggleResult:
        """Follow the user if not yet followed, otherwise unfollow.

        Args:
            actor_id: The acting user
            target_user_id: The user to follow or unfollow

        Returns:
            Whether the edge now exists, plus both affected counters

        Raises:
            InvalidTargetError: If the actor targets themselves
            NotFoundError: If the target user does not exist
            StoreUnavailableError: If the toggle kept losing races, or on
                storage failure
        """
        with logfire.span(
            "toggle_service.toggle_follow",
            actor_id=str(actor_id),
            target_user_id=str(target_user_id),
        ):
            if actor_id == target_user_id:
                logfire.warn("Self-follow rejected", actor_id=str(actor_id))
                raise InvalidTargetError("Users cannot follow themselves")

            target_user = await self.user_service.get_user_by_id(target_user_id)
            if not target_user:
                raise NotFoundError("User", str(target_user_id))

            async def on_change(delta: int) -> FollowToggleResult:
                following, followers = await self.counter_service.adjust_follow_pair(
                    actor_id, target_user_id, delta
                )
                return FollowToggleResult(
                    active=delta > 0,
                    followers_count=followers,
                    following_count=following,
                )

            result = await self._toggle(
                self.follow_repository,
                actor_id,
                target_user_id,
                TargetType.USER,
                on_change,
            )
            logfire.info(
                "Follow toggled",
                actor_id=str(actor_id),
                target_user_id=str(target_user_id),
                following=result.active,
                followers_count=result.followers_count,
            )
            return result

    async def _toggle(
        self,
        repository: RelationshipRepository,
        actor_id: UserId,
        target_id: UUID,
        target_type: TargetType,
        on_change: Callable[[int], Awaitable],
    ):
        for attempt in range(1, self.max_attempts + 1):
            try:
                await repository.insert(actor_id, target_id, target_type)
            except ConflictError:
                try:
                    await repository.remove(actor_id, target_id, target_type)
                except NotFoundError:
                    logfire.warn(
                        "Toggle lost a concurrent remove, retrying",
                        actor_id=str(actor_id),
                        target_id=str(target_id),
                        attempt=attempt,
                    )
                    continue
                return await on_change(-1)
            return await on_change(1)

        logfire.error(
            "Toggle retries exhausted",
            actor_id=str(actor_id),
            target_id=str(target_id),
            attempts=self.max_attempts,
        )
        raise StoreUnavailableError(
            f"Toggle on {target_type.value}:{target_id} did not settle "
            f"after {self.max_attempts} attempts"
        )

    async def _require_likeable_target(
        self, target_id: UUID, target_type: TargetType
    ) -> None:
        if target_type == TargetType.PROJECT:
            project = await self.project_service.get_project_by_id(ProjectId(target_id))
            if not project:
                raise NotFoundError("Project", str(target_id))
        else:
            comment = await self.comment_service.get_active_comment(CommentId(target_id))
            if not comment:
                raise NotFoundError("Comment", str(target_id))
