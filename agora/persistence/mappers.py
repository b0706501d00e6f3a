"""Mappers for converting between database rows and domain models.

Domain models nest their counters under ``stats`` while the tables keep
them as flat ``<counter>_count`` columns, so mapping is done by hand.
"""

from typing import Any, Dict
from uuid import UUID

from agora.domain.model import (
    Comment,
    CommentStats,
    Follow,
    Like,
    Project,
    ProjectStats,
    User,
    UserStats,
)
from agora.domain.value import (
    CommentId,
    CounterName,
    FollowId,
    LikeId,
    ProjectId,
    TargetType,
    UserId,
)
from agora.domain.value.types import Username


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def counter_column(counter: CounterName) -> str:
    """Return the column name that stores a counter."""
    return f"{counter.value}_count"


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        name=row["name"],
        avatar_url=row.get("avatar_url"),
        stats=UserStats(
            followers=row["followers_count"],
            following=row["following_count"],
        ),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "username": str(user.username),
        "name": user.name,
        "avatar_url": user.avatar_url,
        "followers_count": user.stats.followers,
        "following_count": user.stats.following,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_project(row: Dict[str, Any]) -> Project:
    """Convert database row to Project domain model."""
    return Project(
        id=ProjectId(_uuid(row["id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        title=row["title"],
        stats=ProjectStats(
            likes=row["likes_count"],
            comments=row["comments_count"],
        ),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def project_to_dict(project: Project) -> Dict[str, Any]:
    """Convert Project domain model to database dict."""
    return {
        "id": project.id,
        "owner_id": project.owner_id,
        "title": project.title,
        "likes_count": project.stats.likes,
        "comments_count": project.stats.comments,
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        project_id=ProjectId(_uuid(row["project_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        depth=row["depth"],
        stats=CommentStats(
            likes=row["likes_count"],
            replies=row["replies_count"],
            report_count=row["report_count"],
        ),
        is_active=row["is_active"],
        is_edited=row["is_edited"],
        edited_at=row.get("edited_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return {
        "id": comment.id,
        "project_id": comment.project_id,
        "author_id": comment.author_id,
        "content": comment.content,
        "parent_id": comment.parent_id,
        "depth": comment.depth,
        "likes_count": comment.stats.likes,
        "replies_count": comment.stats.replies,
        "report_count": comment.stats.report_count,
        "is_active": comment.is_active,
        "is_edited": comment.is_edited,
        "edited_at": comment.edited_at,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert database row to Like domain model."""
    return Like(
        id=LikeId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        target_id=_uuid(row["target_id"]),
        target_type=TargetType(row["target_type"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    data = like.model_dump()
    data["target_type"] = like.target_type.value
    return data


def row_to_follow(row: Dict[str, Any]) -> Follow:
    """Convert database row to Follow domain model."""
    return Follow(
        id=FollowId(_uuid(row["id"])),
        follower_id=UserId(_uuid(row["follower_id"])),
        following_id=UserId(_uuid(row["following_id"])),
        created_at=row["created_at"],
    )


def follow_to_dict(follow: Follow) -> Dict[str, Any]:
    """Convert Follow domain model to database dict."""
    return follow.model_dump()
