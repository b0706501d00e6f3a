"""Project aggregate.

Projects are the shared work that users like and discuss. They are created
elsewhere; the engine owns only their interaction counters.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import ProjectId, UserId


class ProjectStats(DomainModel):
    """Denormalized interaction counters.

    ``comments`` counts the project's active comments at every depth.
    """

    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)


class Project(DomainModel):
    """Project aggregate root."""

    id: ProjectId
    owner_id: UserId
    title: str = Field(min_length=1, max_length=200)
    stats: ProjectStats = ProjectStats()
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
