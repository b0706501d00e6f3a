"""Delete comment use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.error import NotFoundError
from agora.domain.service import AuthorizationGate, CommentService
from agora.domain.value import CommentId, ProjectId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    project_id: str
    comment_id: str
    actor_id: str  # User ID from authenticated actor


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    tombstoned: int  # Comments soft-deleted by this call, target included


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft-deleting a comment and its replies."""

    def __init__(
        self,
        comment_service: CommentService,
        authorization_gate: AuthorizationGate,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment thread service
            authorization_gate: Grants moderation rights
        """
        self.comment_service = comment_service
        self.authorization_gate = authorization_gate

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Authors may always delete their own comments; anyone else needs
        moderation rights from the authorization gate.

        Raises:
            NotFoundError: If the comment is missing or not on the project
            ForbiddenError: If the actor may not delete the comment
        """
        project_id = ProjectId(parse_id(request.project_id, "project id"))
        comment_id = CommentId(parse_id(request.comment_id, "comment id"))
        actor_id = UserId(parse_id(request.actor_id, "actor id"))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if not comment or comment.project_id != project_id:
            raise NotFoundError("Comment", str(comment_id))

        is_moderator = comment.author_id != actor_id and (
            await self.authorization_gate.can_moderate(actor_id, comment)
        )

        result = await self.comment_service.delete_comment(
            actor_id, comment_id, is_moderator=is_moderator
        )

        return DeleteCommentResponse(
            comment_id=str(result.comment_id), tombstoned=result.tombstoned
        )
