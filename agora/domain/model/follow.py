"""Follow entity."""

from datetime import datetime

from pydantic import Field, model_validator

from agora.domain.model.common import DomainModel
from agora.domain.value import FollowId, UserId


class Follow(DomainModel):
    """Directed follow edge between two users.

    Business rules:
    - One follow per ordered (follower, following) pair
    - Users cannot follow themselves
    """

    id: FollowId
    follower_id: UserId
    following_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_not_self(self) -> "Follow":
        """Reject self-follow edges."""
        if self.follower_id == self.following_id:
            raise ValueError("Users cannot follow themselves")
        return self
