"""Unit tests for the in-memory repositories backing unit tests."""

from datetime import datetime
from uuid import uuid4

import pytest
from pydantic import ValidationError

from agora.domain.error import ConflictError, NotFoundError
from agora.domain.model import CommentStats
from agora.domain.value import CounterName, TargetType, UserId
from agora.persistence.mappers import comment_to_dict, row_to_comment
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryFollowRepository,
    InMemoryLikeRepository,
    InMemoryProjectRepository,
    InMemoryUserRepository,
)
from tests.conftest import make_comment, make_project, make_user


class TestRelationshipRepositories:
    """Tests for like and follow tuple uniqueness."""

    @pytest.mark.asyncio
    async def test_like_insert_conflicts_and_remove_reports_missing(self):
        """Likes are unique per (user, target) and removal is checked."""
        repo = InMemoryLikeRepository()
        user_id = UserId(uuid4())
        target_id = uuid4()

        await repo.insert(user_id, target_id, TargetType.PROJECT)
        with pytest.raises(ConflictError):
            await repo.insert(user_id, target_id, TargetType.PROJECT)

        # Same ID under another target type is a different tuple
        await repo.insert(user_id, target_id, TargetType.COMMENT)
        assert await repo.count_for_target(target_id, TargetType.PROJECT) == 1

        await repo.remove(user_id, target_id, TargetType.PROJECT)
        with pytest.raises(NotFoundError):
            await repo.remove(user_id, target_id, TargetType.PROJECT)

    @pytest.mark.asyncio
    async def test_follow_edges_are_directed(self):
        """A follows B says nothing about B follows A."""
        repo = InMemoryFollowRepository()
        a, b = UserId(uuid4()), UserId(uuid4())

        await repo.insert(a, b)

        assert await repo.exists(a, b) is True
        assert await repo.exists(b, a) is False
        assert await repo.count_for_target(b, TargetType.USER) == 1
        assert await repo.count_by_actor(a) == 1
        with pytest.raises(ConflictError):
            await repo.insert(a, b)


class TestCounters:
    """Tests for counter deltas."""

    @pytest.mark.asyncio
    async def test_comment_counter_clamps_at_zero(self):
        """Negative deltas never push a counter below zero."""
        user = await make_user(InMemoryUserRepository())
        project = await make_project(InMemoryProjectRepository(), user)
        repo = InMemoryCommentRepository()
        comment = await make_comment(repo, project, user)

        assert await repo.adjust_counter(comment.id, CounterName.LIKES, 2) == 2
        assert await repo.adjust_counter(comment.id, CounterName.LIKES, -5) == 0

    @pytest.mark.asyncio
    async def test_follow_counts_move_together(self):
        """Both sides of a follow edge shift in one call."""
        repo = InMemoryUserRepository()
        a = await make_user(repo)
        b = await make_user(repo)

        assert await repo.adjust_follow_counts(a.id, b.id, 1) == (1, 1)
        assert await repo.adjust_follow_counts(a.id, b.id, -1) == (0, 0)
        with pytest.raises(NotFoundError):
            await repo.adjust_follow_counts(a.id, UserId(uuid4()), 1)


class TestTombstone:
    """Tests for comment soft deletion."""

    @pytest.mark.asyncio
    async def test_tombstone_transitions_active_comments_once(self):
        """Only active comments transition, and each only once."""
        user = await make_user(InMemoryUserRepository())
        project = await make_project(InMemoryProjectRepository(), user)
        repo = InMemoryCommentRepository()
        live = await make_comment(repo, project, user)
        dead = await make_comment(repo, project, user, is_active=False)

        first = await repo.tombstone(
            [live.id, dead.id], "[Comment deleted]", datetime.now()
        )
        second = await repo.tombstone([live.id], "[Comment deleted]", datetime.now())

        assert first == [live.id]
        assert second == []
        stored = await repo.find_by_id(live.id)
        assert stored.is_active is False
        assert stored.content == "[Comment deleted]"
        assert await repo.update_content(live.id, "edit", datetime.now()) is None


class TestReportCount:
    """Tests for the stored report count on comments."""

    @pytest.mark.asyncio
    async def test_report_count_defaults_and_survives_counter_updates(self):
        """Comments start unreported and keep the count through other updates."""
        user = await make_user(InMemoryUserRepository())
        project = await make_project(InMemoryProjectRepository(), user)
        repo = InMemoryCommentRepository()
        comment = await make_comment(repo, project, user)
        assert comment.stats.report_count == 0

        reported = comment.model_copy(
            update={"stats": comment.stats.model_copy(update={"report_count": 2})}
        )
        await repo.save(reported)
        await repo.adjust_counter(comment.id, CounterName.LIKES, 1)

        stored = await repo.find_by_id(comment.id)
        assert stored.stats.report_count == 2
        assert row_to_comment(comment_to_dict(stored)).stats.report_count == 2

    def test_negative_report_count_rejected(self):
        """The count cannot go below zero."""
        with pytest.raises(ValidationError):
            CommentStats(report_count=-1)
