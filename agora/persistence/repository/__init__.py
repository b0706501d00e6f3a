"""PostgreSQL repository implementations."""

from agora.persistence.repository.comment import PostgresCommentRepository
from agora.persistence.repository.follow import PostgresFollowRepository
from agora.persistence.repository.like import PostgresLikeRepository
from agora.persistence.repository.project import PostgresProjectRepository
from agora.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresProjectRepository",
    "PostgresCommentRepository",
    "PostgresLikeRepository",
    "PostgresFollowRepository",
]
