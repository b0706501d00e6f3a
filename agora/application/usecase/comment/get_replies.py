"""Get replies use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import QueryService
from agora.domain.value import CommentId, UserId

from .get_comments import CommentItem


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    comment_id: str
    viewer_id: str | None = None


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    comment_id: str
    replies: list[CommentItem]


class GetRepliesUseCase(BaseUseCase):
    """Use case for listing the direct replies of a comment."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get replies use case.

        Args:
            query_service: Query projection service
        """
        self.query_service = query_service

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Raises:
            NotFoundError: If the comment is missing or deleted
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment id"))
        viewer_id = (
            UserId(parse_id(request.viewer_id, "viewer id"))
            if request.viewer_id
            else None
        )

        views = await self.query_service.reply_listing(comment_id, viewer_id)

        return GetRepliesResponse(
            comment_id=str(comment_id),
            replies=[CommentItem.from_view(view) for view in views],
        )
