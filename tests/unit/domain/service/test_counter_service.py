"""Unit tests for CounterService."""

from uuid import uuid4

import pytest

from agora.domain.error import NotFoundError, ValidationFailedError
from agora.domain.repository import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from agora.domain.service import CommentService, CounterService, ToggleService
from agora.domain.value import CounterName, TargetType
from tests.conftest import make_project, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestAdjust:
    """Tests for adjust method."""

    @pytest.mark.asyncio
    async def test_adjust_returns_new_value(self, unit_env):
        """Deltas accumulate and the new value is returned."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)

        # Act
        await counter_service.adjust(
            project.id, TargetType.PROJECT, CounterName.LIKES, 3
        )
        value = await counter_service.adjust(
            project.id, TargetType.PROJECT, CounterName.LIKES, -1
        )

        # Assert
        assert value == 2

    @pytest.mark.asyncio
    async def test_adjust_clamps_at_zero(self, unit_env):
        """Counters never go negative."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)

        # Act
        value = await counter_service.adjust(
            project.id, TargetType.PROJECT, CounterName.COMMENTS, -5
        )

        # Assert
        assert value == 0
        assert (await project_repo.find_by_id(project.id)).stats.comments == 0

    @pytest.mark.asyncio
    async def test_adjust_rejects_foreign_counter(self, unit_env):
        """Projects have no replies counter."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)

        # Act & Assert
        with pytest.raises(ValidationFailedError):
            await counter_service.adjust(
                project.id, TargetType.PROJECT, CounterName.REPLIES, 1
            )

    @pytest.mark.asyncio
    async def test_adjust_missing_entity_raises_not_found(self, unit_env):
        """Adjusting an unknown entity fails."""
        counter_service = await unit_env.get(CounterService)

        with pytest.raises(NotFoundError):
            await counter_service.adjust(
                uuid4(), TargetType.COMMENT, CounterName.LIKES, 1
            )


class TestReconcile:
    """Tests for reconcile and reconcile_all methods."""

    @pytest.mark.asyncio
    async def test_reconcile_after_operations_reports_no_drift(self, unit_env):
        """Counters maintained by the services agree with the rows."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        toggle_service = await unit_env.get(ToggleService)
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        alice = await make_user(user_repo)
        bob = await make_user(user_repo)
        project = await make_project(await unit_env.get(ProjectRepository), alice)

        root = await comment_service.create_comment(alice.id, project.id, "root")
        reply = await comment_service.create_comment(
            bob.id, project.id, "reply", parent_id=root.id
        )
        await comment_service.create_comment(
            alice.id, project.id, "nested", parent_id=reply.id
        )
        await toggle_service.toggle_like(bob.id, project.id, TargetType.PROJECT)
        await toggle_service.toggle_like(bob.id, root.id, TargetType.COMMENT)
        await toggle_service.toggle_follow(bob.id, alice.id)
        await comment_service.delete_comment(bob.id, reply.id)

        # Act
        reports = [
            await counter_service.reconcile(project.id, TargetType.PROJECT),
            await counter_service.reconcile(root.id, TargetType.COMMENT),
            await counter_service.reconcile(reply.id, TargetType.COMMENT),
            await counter_service.reconcile(alice.id, TargetType.USER),
            await counter_service.reconcile(bob.id, TargetType.USER),
        ]

        # Assert
        for report in reports:
            assert report.drifted is False
            assert all(entry.delta == 0 for entry in report.entries)

    @pytest.mark.asyncio
    async def test_reconcile_corrects_injected_drift(self, unit_env):
        """A drifted counter is overwritten and reported with its delta."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        toggle_service = await unit_env.get(ToggleService)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)
        await toggle_service.toggle_like(user.id, project.id, TargetType.PROJECT)
        await project_repo.set_counter(project.id, CounterName.LIKES, 7)

        # Act
        report = await counter_service.reconcile(project.id, TargetType.PROJECT)

        # Assert
        likes = next(e for e in report.entries if e.counter == CounterName.LIKES)
        assert report.drifted is True
        assert likes.stored == 7
        assert likes.corrected == 1
        assert likes.delta == -6
        assert (await project_repo.find_by_id(project.id)).stats.likes == 1

        second = await counter_service.reconcile(project.id, TargetType.PROJECT)
        assert second.drifted is False

    @pytest.mark.asyncio
    async def test_reconcile_counts_comments_at_every_depth(self, unit_env):
        """The project comments counter covers replies as well."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        root = await comment_service.create_comment(user.id, project.id, "root")
        await comment_service.create_comment(
            user.id, project.id, "reply", parent_id=root.id
        )

        # Act
        computed = await counter_service.compute(
            project.id, TargetType.PROJECT, CounterName.COMMENTS
        )

        # Assert
        assert computed == 2

    @pytest.mark.asyncio
    async def test_reconcile_missing_entity_raises_not_found(self, unit_env):
        """Reconciling an unknown entity fails."""
        counter_service = await unit_env.get(CounterService)

        with pytest.raises(NotFoundError):
            await counter_service.reconcile(uuid4(), TargetType.USER)

    @pytest.mark.asyncio
    async def test_reconcile_all_sweeps_in_batches(self, unit_env):
        """The sweep visits every entity across batches and fixes drifted ones."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        projects = [await make_project(project_repo, user) for _ in range(5)]
        await project_repo.set_counter(projects[0].id, CounterName.LIKES, 4)
        await project_repo.set_counter(projects[3].id, CounterName.COMMENTS, 2)

        # Act
        summary = await counter_service.reconcile_all(
            TargetType.PROJECT, batch_size=2
        )

        # Assert
        assert summary.entities == 5
        assert summary.corrected == 2
        for project in projects:
            stored = await project_repo.find_by_id(project.id)
            assert stored.stats.likes == 0
            assert stored.stats.comments == 0


class TestGetCounts:
    """Tests for get_counts method."""

    @pytest.mark.asyncio
    async def test_returns_counters_of_entity_type(self, unit_env):
        """Each entity type exposes its own counters."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        comment_repo = await unit_env.get(CommentRepository)
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        comment = await comment_service.create_comment(user.id, project.id, "hi")
        await comment_repo.adjust_counter(comment.id, CounterName.LIKES, 2)

        # Act
        user_counts = await counter_service.get_counts(user.id, TargetType.USER)
        comment_counts = await counter_service.get_counts(
            comment.id, TargetType.COMMENT
        )

        # Assert
        assert user_counts == {CounterName.FOLLOWERS: 0, CounterName.FOLLOWING: 0}
        assert comment_counts == {CounterName.LIKES: 2, CounterName.REPLIES: 0}
