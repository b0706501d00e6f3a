"""Project domain service."""

import logfire

from agora.domain.model.project import Project
from agora.domain.repository import ProjectRepository
from agora.domain.value import ProjectId

from .base import Service


class ProjectService(Service):
    """Domain service for project lookups."""

    def __init__(self, project_repository: ProjectRepository) -> None:
        """Initialize project service.

        Args:
            project_repository: Project repository
        """
        self.project_repository = project_repository

    async def get_project_by_id(self, project_id: ProjectId) -> Project | None:
        """Get a project by ID.

        Args:
            project_id: Project ID

        Returns:
            Project if found, None otherwise
        """
        with logfire.span(
            "project_service.get_project_by_id", project_id=str(project_id)
        ):
            project = await self.project_repository.find_by_id(project_id)
            if not project:
                logfire.warn("Project not found", project_id=str(project_id))
            return project
