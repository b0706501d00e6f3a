"""Follow use cases."""

from .get_follow_status import (
    GetFollowStatusRequest,
    GetFollowStatusResponse,
    GetFollowStatusUseCase,
)
from .get_user_stats import (
    GetUserStatsRequest,
    GetUserStatsResponse,
    GetUserStatsUseCase,
)
from .list_follows import (
    FollowItem,
    ListFollowsRequest,
    ListFollowsResponse,
    ListFollowsUseCase,
)
from .toggle_follow import (
    ToggleFollowRequest,
    ToggleFollowResponse,
    ToggleFollowUseCase,
)

__all__ = [
    "FollowItem",
    "GetFollowStatusRequest",
    "GetFollowStatusResponse",
    "GetFollowStatusUseCase",
    "GetUserStatsRequest",
    "GetUserStatsResponse",
    "GetUserStatsUseCase",
    "ListFollowsRequest",
    "ListFollowsResponse",
    "ListFollowsUseCase",
    "ToggleFollowRequest",
    "ToggleFollowResponse",
    "ToggleFollowUseCase",
]
