"""In-memory project repository for testing."""

from datetime import datetime
from typing import Optional

from agora.domain.error import NotFoundError
from agora.domain.model.project import Project
from agora.domain.repository.project import ProjectRepository
from agora.domain.value import CounterName, ProjectId, UserId


class InMemoryProjectRepository(ProjectRepository):
    """In-memory implementation of ProjectRepository for testing."""

    def __init__(self) -> None:
        self._projects: dict[ProjectId, Project] = {}

    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        """Find a project by ID."""
        return self._projects.get(project_id)

    async def save(self, project: Project) -> Project:
        """Save a project (create or update)."""
        self._projects[project.id] = project
        return project

    async def adjust_counter(
        self, project_id: ProjectId, counter: CounterName, delta: int
    ) -> int:
        """Add ``delta`` to a counter (minimum 0)."""
        project = self._projects.get(project_id)
        if project is None:
            raise NotFoundError("Project", str(project_id))

        value = max(getattr(project.stats, counter.value) + delta, 0)
        self._projects[project_id] = project.model_copy(
            update={
                "stats": project.stats.model_copy(update={counter.value: value}),
                "updated_at": datetime.now(),
            }
        )
        return value

    async def set_counter(
        self, project_id: ProjectId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter."""
        project = self._projects.get(project_id)
        if project is None:
            return
        self._projects[project_id] = project.model_copy(
            update={"stats": project.stats.model_copy(update={counter.value: value})}
        )

    async def find_ids(
        self, limit: int, after: Optional[ProjectId] = None
    ) -> list[ProjectId]:
        """List project IDs in ascending order."""
        ids = sorted(self._projects)
        if after is not None:
            ids = [pid for pid in ids if pid > after]
        return ids[:limit]

    async def find_ids_by_owner(self, owner_id: UserId) -> list[ProjectId]:
        """List the IDs of the projects a user owns."""
        return [pid for pid, p in self._projects.items() if p.owner_id == owner_id]
