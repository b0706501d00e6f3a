"""Unit tests for ToggleLikeUseCase."""

import pytest

from agora.application.usecase.like import ToggleLikeRequest, ToggleLikeUseCase
from agora.domain.error import ValidationFailedError
from agora.domain.repository import ProjectRepository, UserRepository
from agora.domain.value import TargetType
from tests.conftest import make_project, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestToggleLikeUseCase:
    """Tests for ToggleLikeUseCase."""

    @pytest.mark.asyncio
    async def test_toggle_like_reports_state_and_count(self, unit_env):
        """The response carries the new like state and count."""
        # Arrange
        use_case = await unit_env.get(ToggleLikeUseCase)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        request = ToggleLikeRequest(
            actor_id=str(user.id),
            target_id=str(project.id),
            target_type=TargetType.PROJECT,
        )

        # Act
        liked = await use_case.execute(request)
        unliked = await use_case.execute(request)

        # Assert
        assert liked.liked is True
        assert liked.likes_count == 1
        assert liked.target_id == str(project.id)
        assert unliked.liked is False
        assert unliked.likes_count == 0

    @pytest.mark.asyncio
    async def test_malformed_target_id_rejected(self, unit_env):
        """Target IDs must be UUIDs."""
        # Arrange
        use_case = await unit_env.get(ToggleLikeUseCase)
        user = await make_user(await unit_env.get(UserRepository))

        # Act & Assert
        with pytest.raises(ValidationFailedError, match="Invalid project id"):
            await use_case.execute(
                ToggleLikeRequest(
                    actor_id=str(user.id),
                    target_id="not-a-uuid",
                    target_type=TargetType.PROJECT,
                )
            )
