"""Update comment use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.error import NotFoundError
from agora.domain.service import CommentService
from agora.domain.value import CommentId, ProjectId, UserId

from .create_comment import CommentDetail


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    project_id: str
    comment_id: str
    content: str
    actor_id: str  # User ID from authenticated actor


class UpdateCommentResponse(CommentDetail):
    """Update comment response."""


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment thread service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment is missing, deleted or not on the project
            NotAuthorizedError: If the actor is not the author
            ValidationFailedError: If content is out of bounds
        """
        project_id = ProjectId(parse_id(request.project_id, "project id"))
        comment_id = CommentId(parse_id(request.comment_id, "comment id"))

        existing = await self.comment_service.get_comment_by_id(comment_id)
        if not existing or existing.project_id != project_id:
            raise NotFoundError("Comment", str(comment_id))

        comment = await self.comment_service.edit_comment(
            actor_id=UserId(parse_id(request.actor_id, "actor id")),
            comment_id=comment_id,
            content=request.content,
        )

        return UpdateCommentResponse.from_comment(comment)
