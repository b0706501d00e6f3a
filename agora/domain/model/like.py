"""Like entity.

A like is a pure relationship row: it carries no history, so unliking
deletes it outright.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import LikeId, TargetType, UserId


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One like per user per target (enforced by database unique constraint)
    - Polymorphic reference to a project or comment
    """

    id: LikeId
    user_id: UserId
    target_id: UUID  # ProjectId or CommentId (both are UUIDs)
    target_type: TargetType
    created_at: datetime = Field(default_factory=datetime.now)
