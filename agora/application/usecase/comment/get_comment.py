"""Get comment use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import QueryService
from agora.domain.value import CommentId, ProjectId, UserId

from .get_comments import CommentItem


class GetCommentRequest(BaseModel):
    """Get comment request."""

    project_id: str
    comment_id: str
    viewer_id: str | None = None


class GetCommentResponse(BaseModel):
    """Get comment response."""

    comment: CommentItem
    replies: list[CommentItem]


class GetCommentUseCase(BaseUseCase):
    """Use case for reading one comment together with its direct replies."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get comment use case.

        Args:
            query_service: Query projection service
        """
        self.query_service = query_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            NotFoundError: If the comment is missing, deleted or belongs to
                another project
        """
        project_id = ProjectId(parse_id(request.project_id, "project id"))
        comment_id = CommentId(parse_id(request.comment_id, "comment id"))
        viewer_id = (
            UserId(parse_id(request.viewer_id, "viewer id"))
            if request.viewer_id
            else None
        )

        thread = await self.query_service.comment_thread(
            project_id, comment_id, viewer_id
        )

        return GetCommentResponse(
            comment=CommentItem.from_view(thread.comment),
            replies=[CommentItem.from_view(view) for view in thread.replies],
        )
