"""Get follow status use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import QueryService
from agora.domain.value import FollowStatus, UserId


class GetFollowStatusRequest(BaseModel):
    """Get follow status request."""

    viewer_id: str
    user_id: str


class GetFollowStatusResponse(BaseModel):
    """Get follow status response."""

    user_id: str
    status: FollowStatus


class GetFollowStatusUseCase(BaseUseCase):
    """Use case for describing how the viewer and another user are connected."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get follow status use case.

        Args:
            query_service: Query projection service
        """
        self.query_service = query_service

    async def execute(self, request: GetFollowStatusRequest) -> GetFollowStatusResponse:
        """Execute get follow status flow."""
        viewer_id = UserId(parse_id(request.viewer_id, "viewer id"))
        user_id = UserId(parse_id(request.user_id, "user id"))

        status = await self.query_service.follow_status(viewer_id, user_id)

        return GetFollowStatusResponse(user_id=str(user_id), status=status)
