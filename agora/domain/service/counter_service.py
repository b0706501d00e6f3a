"""Counter synchronization service.

Denormalized counters (likes, comments, replies, followers, following) are
a projection of the relationship rows. They are only ever changed through
atomic deltas, and can be recomputed from the rows and overwritten when
they drift.
"""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import computed_field

from agora.domain.error import NotFoundError, ValidationFailedError
from agora.domain.repository import (
    CommentRepository,
    FollowRepository,
    LikeRepository,
    ProjectRepository,
    UserRepository,
)
from agora.domain.value import (
    COUNTERS_BY_TARGET,
    CommentId,
    CounterName,
    ProjectId,
    TargetType,
    UserId,
)
from agora.domain.value.common import ValueObject

from .base import Service


class CounterCorrection(ValueObject):
    """Outcome of reconciling one counter."""

    counter: CounterName
    stored: int
    corrected: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def delta(self) -> int:
        return self.corrected - self.stored


class ReconciliationReport(ValueObject):
    """Outcome of reconciling every counter on one entity."""

    target_id: UUID
    target_type: TargetType
    entries: list[CounterCorrection]

    @property
    def drifted(self) -> bool:
        """Whether any stored counter disagreed with its aggregate."""
        return any(entry.delta != 0 for entry in self.entries)


class SweepSummary(ValueObject):
    """Outcome of reconciling every entity of one type."""

    target_type: TargetType
    entities: int
    corrected: int


class CounterService(Service):
    """Domain service owning every counter mutation and read."""

    def __init__(
        self,
        user_repository: UserRepository,
        project_repository: ProjectRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        follow_repository: FollowRepository,
    ) -> None:
        """Initialize counter service.

        Args:
            user_repository: User repository
            project_repository: Project repository
            comment_repository: Comment repository
            like_repository: Like repository
            follow_repository: Follow repository
        """
        self.user_repository = user_repository
        self.project_repository = project_repository
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.follow_repository = follow_repository

    async def adjust(
        self,
        target_id: UUID,
        target_type: TargetType,
        counter: CounterName,
        delta: int,
    ) -> int:
        """Atomically add ``delta`` to a project or comment counter.

        Args:
            target_id: Project or comment ID
            target_type: PROJECT or COMMENT
            counter: Counter to change
            delta: Amount to add (negative to subtract)

        Returns:
            The counter value after the update

        Raises:
            ValidationFailedError: If the entity does not carry the counter
            NotFoundError: If the entity does not exist
        """
        self._check_counter(target_type, counter)
        with logfire.span(
            "counter_service.adjust",
            target_id=str(target_id),
            target_type=target_type.value,
            counter=counter.value,
            delta=delta,
        ):
            if target_type == TargetType.PROJECT:
                return await self.project_repository.adjust_counter(
                    ProjectId(target_id), counter, delta
                )
            return await self.comment_repository.adjust_counter(
                CommentId(target_id), counter, delta
            )

    async def adjust_follow_pair(
        self, follower_id: UserId, following_id: UserId, delta: int
    ) -> tuple[int, int]:
        """Atomically shift both counters of a follow edge.

        Returns:
            Tuple of (follower's following count, followed user's followers count)
        """
        with logfire.span(
            "counter_service.adjust_follow_pair",
            follower_id=str(follower_id),
            following_id=str(following_id),
            delta=delta,
        ):
            return await self.user_repository.adjust_follow_counts(
                follower_id, following_id, delta
            )

    async def get_counts(
        self, target_id: UUID, target_type: TargetType
    ) -> dict[CounterName, int]:
        """Read the stored counters of an entity (fast path).

        Raises:
            NotFoundError: If the entity does not exist
        """
        with logfire.span(
            "counter_service.get_counts",
            target_id=str(target_id),
            target_type=target_type.value,
        ):
            stats = (await self._load(target_id, target_type)).stats
            return {
                counter: getattr(stats, counter.value)
                for counter in COUNTERS_BY_TARGET[target_type]
            }

    async def compute(
        self, target_id: UUID, target_type: TargetType, counter: CounterName
    ) -> int:
        """Recompute a counter from the relationship rows."""
        self._check_counter(target_type, counter)
        if counter == CounterName.LIKES:
            return await self.like_repository.count_for_target(target_id, target_type)
        if counter == CounterName.COMMENTS:
            return await self.comment_repository.count_active_by_project(
                ProjectId(target_id)
            )
        if counter == CounterName.REPLIES:
            counts = await self.comment_repository.count_active_children(
                [CommentId(target_id)]
            )
            return counts[CommentId(target_id)]
        if counter == CounterName.FOLLOWERS:
            return await self.follow_repository.count_for_target(
                target_id, TargetType.USER
            )
        return await self.follow_repository.count_by_actor(UserId(target_id))

    async def reconcile(
        self, target_id: UUID, target_type: TargetType
    ) -> ReconciliationReport:
        """Overwrite each stored counter of an entity with its aggregate.

        After any non-interleaved sequence of operations every entry in the
        report has a delta of zero; a non-zero delta means drift was found
        and repaired. Reply counters of tombstoned comments are historical
        and are reported unchanged.

        Args:
            target_id: Entity ID
            target_type: Entity type

        Returns:
            Report with one entry per counter

        Raises:
            NotFoundError: If the entity does not exist
        """
        with logfire.span(
            "counter_service.reconcile",
            target_id=str(target_id),
            target_type=target_type.value,
        ):
            entity = await self._load(target_id, target_type)

            entries = []
            for counter in COUNTERS_BY_TARGET[target_type]:
                stored = getattr(entity.stats, counter.value)
                if counter == CounterName.REPLIES and not entity.is_active:
                    # Tombstoned comments keep the reply count they had when deleted
                    corrected = stored
                else:
                    corrected = await self.compute(target_id, target_type, counter)
                if corrected != stored:
                    await self._set(target_id, target_type, counter, corrected)
                    logfire.warn(
                        "Counter drift corrected",
                        target_id=str(target_id),
                        target_type=target_type.value,
                        counter=counter.value,
                        stored=stored,
                        corrected=corrected,
                    )
                entries.append(
                    CounterCorrection(counter=counter, stored=stored, corrected=corrected)
                )

            return ReconciliationReport(
                target_id=target_id, target_type=target_type, entries=entries
            )

    async def reconcile_all(
        self, target_type: TargetType, batch_size: int = 500
    ) -> SweepSummary:
        """Reconcile every entity of one type, in ID order.

        Args:
            target_type: Entity type to sweep
            batch_size: Number of IDs fetched per page

        Returns:
            Summary with the number of entities visited and corrected
        """
        with logfire.span(
            "counter_service.reconcile_all",
            target_type=target_type.value,
            batch_size=batch_size,
        ):
            entities = 0
            corrected = 0
            after: Optional[UUID] = None
            while True:
                ids = await self._find_ids(target_type, batch_size, after)
                if not ids:
                    break
                for target_id in ids:
                    try:
                        report = await self.reconcile(target_id, target_type)
                    except NotFoundError:
                        # Entity removed between listing and reconciling
                        continue
                    entities += 1
                    if report.drifted:
                        corrected += 1
                after = ids[-1]

            logfire.info(
                "Counter sweep finished",
                target_type=target_type.value,
                entities=entities,
                corrected=corrected,
            )
            return SweepSummary(
                target_type=target_type, entities=entities, corrected=corrected
            )

    @staticmethod
    def _check_counter(target_type: TargetType, counter: CounterName) -> None:
        if counter not in COUNTERS_BY_TARGET[target_type]:
            raise ValidationFailedError(
                f"{target_type.value} has no {counter.value} counter"
            )

    async def _load(self, target_id: UUID, target_type: TargetType):
        if target_type == TargetType.PROJECT:
            entity = await self.project_repository.find_by_id(ProjectId(target_id))
        elif target_type == TargetType.COMMENT:
            entity = await self.comment_repository.find_by_id(CommentId(target_id))
        else:
            entity = await self.user_repository.find_by_id(UserId(target_id))

        if entity is None:
            raise NotFoundError(target_type.value.capitalize(), str(target_id))
        return entity

    async def _set(
        self,
        target_id: UUID,
        target_type: TargetType,
        counter: CounterName,
        value: int,
    ) -> None:
        if target_type == TargetType.PROJECT:
            await self.project_repository.set_counter(
                ProjectId(target_id), counter, value
            )
        elif target_type == TargetType.COMMENT:
            await self.comment_repository.set_counter(
                CommentId(target_id), counter, value
            )
        else:
            await self.user_repository.set_counter(UserId(target_id), counter, value)

    async def _find_ids(
        self, target_type: TargetType, limit: int, after: Optional[UUID]
    ) -> list:
        if target_type == TargetType.PROJECT:
            return await self.project_repository.find_ids(limit, after)
        if target_type == TargetType.COMMENT:
            return await self.comment_repository.find_ids(limit, after)
        return await self.user_repository.find_ids(limit, after)
