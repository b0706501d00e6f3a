"""Get user stats use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import QueryService
from agora.domain.value import UserId


class GetUserStatsRequest(BaseModel):
    """Get user stats request."""

    user_id: str


class GetUserStatsResponse(BaseModel):
    """Get user stats response."""

    user_id: str
    total_projects: int
    total_likes: int
    total_comments: int
    total_followers: int
    total_following: int


class GetUserStatsUseCase(BaseUseCase):
    """Use case for a user's interaction totals."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get user stats use case.

        Args:
            query_service: Query projection service
        """
        self.query_service = query_service

    async def execute(self, request: GetUserStatsRequest) -> GetUserStatsResponse:
        """Execute get user stats flow."""
        user_id = UserId(parse_id(request.user_id, "user id"))

        stats = await self.query_service.user_stats(user_id)

        return GetUserStatsResponse(
            user_id=str(user_id),
            total_projects=stats.projects,
            total_likes=stats.likes_received,
            total_comments=stats.comments_received,
            total_followers=stats.followers,
            total_following=stats.following,
        )
