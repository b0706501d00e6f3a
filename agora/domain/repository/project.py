"""Project repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.project import Project
from agora.domain.value import CounterName, ProjectId, UserId


class ProjectRepository(ABC):
    """Repository for Project aggregate.

    Defines the contract for project persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        """Find a project by ID.

        Args:
            project_id: The project's unique identifier

        Returns:
            The project if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, project: Project) -> Project:
        """Save a project (create or update).

        Args:
            project: The project to save

        Returns:
            The saved project
        """
        pass

    @abstractmethod
    async def adjust_counter(
        self, project_id: ProjectId, counter: CounterName, delta: int
    ) -> int:
        """Atomically add ``delta`` to a counter, clamped at zero.

        Args:
            project_id: The project's ID
            counter: LIKES or COMMENTS
            delta: Amount to add (negative to subtract)

        Returns:
            The counter value after the update

        Raises:
            NotFoundError: If the project does not exist
        """
        pass

    @abstractmethod
    async def set_counter(
        self, project_id: ProjectId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter (used by reconciliation)."""
        pass

    @abstractmethod
    async def find_ids(
        self, limit: int, after: Optional[ProjectId] = None
    ) -> List[ProjectId]:
        """List project IDs in ascending order (keyset pagination)."""
        pass

    @abstractmethod
    async def find_ids_by_owner(self, owner_id: UserId) -> List[ProjectId]:
        """List the IDs of the projects a user owns."""
        pass
