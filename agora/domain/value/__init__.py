"""Domain value objects for Agora."""

from agora.domain.value.identifiers import (
    CommentId,
    FollowId,
    LikeId,
    ProjectId,
    UserId,
)
from agora.domain.value.types import (
    COUNTERS_BY_TARGET,
    CommentSortOrder,
    CounterName,
    FollowStatus,
    Target,
    TargetType,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "ProjectId",
    "CommentId",
    "LikeId",
    "FollowId",
    # Types
    "COUNTERS_BY_TARGET",
    "CommentSortOrder",
    "CounterName",
    "FollowStatus",
    "Target",
    "TargetType",
    "Username",
]
