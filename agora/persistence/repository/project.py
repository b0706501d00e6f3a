"""PostgreSQL implementation of Project repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import NotFoundError
from agora.domain.model import Project
from agora.domain.repository import ProjectRepository
from agora.domain.value import CounterName, ProjectId, UserId
from agora.persistence.error import translate_store_errors
from agora.persistence.mappers import counter_column, project_to_dict, row_to_project
from agora.persistence.tables import projects_table


class PostgresProjectRepository(ProjectRepository):
    """PostgreSQL implementation of ProjectRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_store_errors
    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        """Find a project by ID."""
        stmt = select(projects_table).where(projects_table.c.id == project_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_project(row._asdict()) if row else None

    @translate_store_errors
    async def save(self, project: Project) -> Project:
        """Save a project (create or update)."""
        project_dict = project_to_dict(project)
        existing = await self.find_by_id(project.id)

        if existing:
            stmt = (
                update(projects_table)
                .where(projects_table.c.id == project.id)
                .values(**project_dict)
            )
        else:
            stmt = insert(projects_table).values(**project_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return project

    @translate_store_errors
    async def adjust_counter(
        self, project_id: ProjectId, counter: CounterName, delta: int
    ) -> int:
        """Atomically add ``delta`` to a counter (minimum 0)."""
        column = projects_table.c[counter_column(counter)]
        stmt = (
            update(projects_table)
            .where(projects_table.c.id == project_id)
            .values(
                {
                    column.key: func.greatest(column + delta, 0),
                    "updated_at": datetime.now(),
                }
            )
            .returning(column)
        )
        result = await self.session.execute(stmt)
        value = result.scalar_one_or_none()
        await self.session.flush()
        if value is None:
            raise NotFoundError("Project", str(project_id))
        return value

    @translate_store_errors
    async def set_counter(
        self, project_id: ProjectId, counter: CounterName, value: int
    ) -> None:
        """Overwrite a stored counter."""
        stmt = (
            update(projects_table)
            .where(projects_table.c.id == project_id)
            .values({counter_column(counter): value})
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @translate_store_errors
    async def find_ids(
        self, limit: int, after: Optional[ProjectId] = None
    ) -> List[ProjectId]:
        """List project IDs in ascending order."""
        stmt = select(projects_table.c.id).order_by(projects_table.c.id).limit(limit)
        if after is not None:
            stmt = stmt.where(projects_table.c.id > after)
        result = await self.session.execute(stmt)
        return [ProjectId(pid) for pid in result.scalars().all()]

    @translate_store_errors
    async def find_ids_by_owner(self, owner_id: UserId) -> List[ProjectId]:
        """List the IDs of the projects a user owns."""
        stmt = select(projects_table.c.id).where(projects_table.c.owner_id == owner_id)
        result = await self.session.execute(stmt)
        return [ProjectId(pid) for pid in result.scalars().all()]
