"""Domain services."""

from .actor_directory import ActorDirectory, ActorSummary
from .authorization_gate import AuthorizationGate
from .base import Service
from .comment_service import CommentPage, CommentService, DeletionResult
from .counter_service import (
    CounterCorrection,
    CounterService,
    ReconciliationReport,
    SweepSummary,
)
from .project_service import ProjectService
from .query_service import (
    CommentListing,
    CommentThreadView,
    CommentView,
    FollowEntry,
    FollowListing,
    QueryService,
    UserStatsView,
)
from .toggle_service import FollowToggleResult, ToggleResult, ToggleService
from .user_service import UserService

__all__ = [
    "ActorDirectory",
    "ActorSummary",
    "AuthorizationGate",
    "CommentListing",
    "CommentPage",
    "CommentService",
    "CommentThreadView",
    "CommentView",
    "CounterCorrection",
    "CounterService",
    "DeletionResult",
    "FollowEntry",
    "FollowListing",
    "FollowToggleResult",
    "ProjectService",
    "QueryService",
    "ReconciliationReport",
    "Service",
    "SweepSummary",
    "ToggleResult",
    "ToggleService",
    "UserService",
    "UserStatsView",
]
