"""Unit tests for counter use cases."""

import pytest

from agora.application.usecase.counter import (
    GetCountsRequest,
    GetCountsUseCase,
    ReconcileCountersRequest,
    ReconcileCountersUseCase,
)
from agora.domain.error import NotFoundError
from agora.domain.repository import ProjectRepository, UserRepository
from agora.domain.value import CounterName, TargetType
from tests.conftest import make_project, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCounterUseCases:
    """Tests for GetCountsUseCase and ReconcileCountersUseCase."""

    @pytest.mark.asyncio
    async def test_reconcile_then_read_counts(self, unit_env):
        """Reconciliation fixes drift and the stored counts reflect it."""
        # Arrange
        reconcile = await unit_env.get(ReconcileCountersUseCase)
        get_counts = await unit_env.get(GetCountsUseCase)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)
        await project_repo.set_counter(project.id, CounterName.LIKES, 3)

        # Act
        report = await reconcile.execute(
            ReconcileCountersRequest(
                target_id=str(project.id), target_type=TargetType.PROJECT
            )
        )
        counts = await get_counts.execute(
            GetCountsRequest(target_id=str(project.id), target_type=TargetType.PROJECT)
        )

        # Assert
        assert report.drifted is True
        likes = next(e for e in report.entries if e.counter == CounterName.LIKES)
        assert (likes.stored, likes.corrected, likes.delta) == (3, 0, -3)
        assert counts.counts == {"likes": 0, "comments": 0}

    @pytest.mark.asyncio
    async def test_counts_for_missing_user_raise_not_found(self, unit_env):
        """Counts need an existing entity."""
        get_counts = await unit_env.get(GetCountsUseCase)

        with pytest.raises(NotFoundError):
            await get_counts.execute(
                GetCountsRequest(
                    target_id="00000000-0000-0000-0000-000000000001",
                    target_type=TargetType.USER,
                )
            )
