"""Repository interfaces for the Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from agora.domain.repository.comment import CommentRepository
from agora.domain.repository.follow import FollowRepository
from agora.domain.repository.like import LikeRepository
from agora.domain.repository.project import ProjectRepository
from agora.domain.repository.relationship import RelationshipRepository
from agora.domain.repository.user import UserRepository

__all__ = [
    "RelationshipRepository",
    "LikeRepository",
    "FollowRepository",
    "UserRepository",
    "ProjectRepository",
    "CommentRepository",
]
