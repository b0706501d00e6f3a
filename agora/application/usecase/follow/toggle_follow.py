"""Toggle follow use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import ToggleService
from agora.domain.value import UserId


class ToggleFollowRequest(BaseModel):
    """Toggle follow request."""

    actor_id: str  # User ID from authenticated actor
    user_id: str  # User to follow or unfollow


class ToggleFollowResponse(BaseModel):
    """Toggle follow response."""

    user_id: str
    following: bool
    followers_count: int  # Of the target user
    following_count: int  # Of the actor


class ToggleFollowUseCase(BaseUseCase):
    """Use case for following or unfollowing a user."""

    def __init__(self, toggle_service: ToggleService) -> None:
        """Initialize toggle follow use case.

        Args:
            toggle_service: Toggle domain service
        """
        self.toggle_service = toggle_service

    async def execute(self, request: ToggleFollowRequest) -> ToggleFollowResponse:
        """Execute toggle follow flow.

        Raises:
            ValidationFailedError: If IDs are malformed
            InvalidTargetError: If the actor targets themselves
            NotFoundError: If the target user does not exist
        """
        actor_id = UserId(parse_id(request.actor_id, "actor id"))
        user_id = UserId(parse_id(request.user_id, "user id"))

        result = await self.toggle_service.toggle_follow(actor_id, user_id)

        return ToggleFollowResponse(
            user_id=str(user_id),
            following=result.active,
            followers_count=result.followers_count,
            following_count=result.following_count,
        )
