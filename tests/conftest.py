"""Test configuration and factories."""

from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from agora.domain.model.comment import Comment
from agora.domain.model.project import Project
from agora.domain.model.user import User
from agora.domain.repository import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from agora.domain.value import CommentId, ProjectId, UserId
from agora.domain.value.types import Username


async def make_user(
    user_repo: UserRepository, username: Optional[str] = None
) -> User:
    """Create and save a user with zeroed counters."""
    user_id = UserId(uuid4())
    username = username or f"user-{str(user_id)[:8]}"
    return await user_repo.save(
        User(
            id=user_id,
            username=Username(username),
            name=username.capitalize(),
            avatar_url=None,
        )
    )


async def make_project(
    project_repo: ProjectRepository, owner: User, title: str = "Open Notebook"
) -> Project:
    """Create and save a project owned by ``owner``."""
    return await project_repo.save(
        Project(id=ProjectId(uuid4()), owner_id=owner.id, title=title)
    )


async def make_comment(
    comment_repo: CommentRepository,
    project: Project,
    author: User,
    parent: Optional[Comment] = None,
    content: str = "Seeded comment",
    is_active: bool = True,
    age: timedelta = timedelta(0),
) -> Comment:
    """Write a comment row directly, bypassing the service and its counters.

    Useful for building trees that the service would not produce on its own,
    such as active replies under a tombstoned parent.
    """
    now = datetime.now() - age
    return await comment_repo.save(
        Comment(
            id=CommentId(uuid4()),
            project_id=project.id,
            author_id=author.id,
            content=content,
            parent_id=parent.id if parent else None,
            depth=parent.depth + 1 if parent else 0,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
    )
