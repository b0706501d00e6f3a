"""Test harness for unit, integration and HTTP tests.

Settings are loaded from environment variables (configure via .env or export).
Integration environments assume PostgreSQL is reachable and migrated.
"""

import pytest_asyncio

from agora.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_toggle_like(unit_env):
            toggle_service = await unit_env.get(ToggleService)
            result = await toggle_service.toggle_like(...)
            assert result.active
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
