"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum
from uuid import UUID

from pydantic import field_validator

from agora.domain.value.common import RootValueObject, ValueObject


class TargetType(str, Enum):
    """Kind of entity an interaction points at."""

    PROJECT = "project"
    COMMENT = "comment"
    USER = "user"

    @property
    def likeable(self) -> bool:
        """Whether likes may target this kind of entity."""
        return self in (TargetType.PROJECT, TargetType.COMMENT)


class CounterName(str, Enum):
    """Denormalized counters kept on owning entities."""

    LIKES = "likes"
    COMMENTS = "comments"
    REPLIES = "replies"
    FOLLOWERS = "followers"
    FOLLOWING = "following"


# Counters carried by each owning entity type
COUNTERS_BY_TARGET: dict[TargetType, tuple[CounterName, ...]] = {
    TargetType.PROJECT: (CounterName.LIKES, CounterName.COMMENTS),
    TargetType.COMMENT: (CounterName.LIKES, CounterName.REPLIES),
    TargetType.USER: (CounterName.FOLLOWERS, CounterName.FOLLOWING),
}


class CommentSortOrder(str, Enum):
    """Sort orders for top-level comment listings."""

    RECENT = "recent"
    MOST_LIKED = "most_liked"


class FollowStatus(str, Enum):
    """Follow relationship between a viewer and another user."""

    FOLLOWING = "following"
    FOLLOWED_BY = "followed_by"
    MUTUAL = "mutual"
    NONE = "none"


class Target(ValueObject):
    """Tagged reference to an interaction target."""

    target_id: UUID
    target_type: TargetType

    def __str__(self) -> str:
        return f"{self.target_type.value}:{self.target_id}"


class Username(RootValueObject[str]):
    """Public username of an actor.

    Letters, digits, underscores and hyphens, 1-50 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[a-zA-Z0-9_-]{1,50}$", v):
            raise ValueError(
                "Username must be 1-50 characters of letters, digits, '_' or '-'"
            )
        return v
