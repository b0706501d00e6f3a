"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.model import Comment
from agora.domain.service import CommentService
from agora.domain.value import CommentId, ProjectId, UserId


class CommentDetail(BaseModel):
    """Full state of a single comment."""

    comment_id: str
    project_id: str
    author_id: str
    parent_id: str | None
    depth: int
    content: str
    likes_count: int
    replies_count: int
    is_active: bool
    is_edited: bool
    edited_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentDetail":
        return cls(
            comment_id=str(comment.id),
            project_id=str(comment.project_id),
            author_id=str(comment.author_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            content=comment.content,
            likes_count=comment.stats.likes,
            replies_count=comment.stats.replies,
            is_active=comment.is_active,
            is_edited=comment.is_edited,
            edited_at=comment.edited_at,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    project_id: str  # UUID string
    content: str
    actor_id: str  # User ID from authenticated actor
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(CommentDetail):
    """Create comment response."""


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a project or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment thread service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        The comment service checks the project, the parent and the depth
        bound, and updates the project and parent counters.

        Args:
            request: Create comment request

        Returns:
            Create comment response with comment details

        Raises:
            ValidationFailedError: If IDs are malformed or content is out of bounds
            NotFoundError: If the project or parent does not exist
            InvalidTargetError: If the parent belongs to another project
            DepthExceededError: If the reply would nest too deep
        """
        project_id = ProjectId(parse_id(request.project_id, "project id"))
        parent_id = (
            CommentId(parse_id(request.parent_id, "parent id"))
            if request.parent_id
            else None
        )

        comment = await self.comment_service.create_comment(
            actor_id=UserId(parse_id(request.actor_id, "actor id")),
            project_id=project_id,
            content=request.content,
            parent_id=parent_id,
        )

        return CreateCommentResponse.from_comment(comment)
