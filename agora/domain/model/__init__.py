"""Domain model entities for Agora."""

from agora.domain.model.comment import Comment, CommentStats
from agora.domain.model.follow import Follow
from agora.domain.model.like import Like
from agora.domain.model.project import Project, ProjectStats
from agora.domain.model.user import User, UserStats

__all__ = [
    "User",
    "UserStats",
    "Project",
    "ProjectStats",
    "Comment",
    "CommentStats",
    "Like",
    "Follow",
]
