"""Comment entity.

Comments are threaded discussions on projects. Threads are flat records
linked by ``parent_id``; subtrees are resolved through the parent index
rather than object references.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from agora.domain.model.common import DomainModel
from agora.domain.value import CommentId, ProjectId, UserId


class CommentStats(DomainModel):
    """Denormalized comment counters.

    ``replies`` tracks active direct children only. Counters on comments
    inside a deleted subtree keep their historical values.
    """

    likes: int = Field(default=0, ge=0)
    replies: int = Field(default=0, ge=0)

    # Reporting happens outside the engine; the count is stored, not maintained
    report_count: int = Field(default=0, ge=0)


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a project or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, parent depth + 1 for replies)

    Deleted comments stay in place as tombstones (``is_active`` False) so
    their children's ``parent_id`` keeps resolving.
    """

    id: CommentId
    project_id: ProjectId
    author_id: UserId
    content: str = Field(min_length=1)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    stats: CommentStats = CommentStats()
    is_active: bool = True
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_depth(self) -> "Comment":
        """Top-level comments sit at depth 0 and replies below it."""
        if self.parent_id is None and self.depth != 0:
            raise ValueError("Top-level comments must have depth 0")
        if self.parent_id is not None and self.depth == 0:
            raise ValueError("Replies must have depth of at least 1")
        return self

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None
