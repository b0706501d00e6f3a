"""Toggle like use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import ToggleService
from agora.domain.value import TargetType, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    actor_id: str  # User ID from authenticated actor
    target_id: str  # UUID string
    target_type: TargetType


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    target_id: str
    target_type: TargetType
    liked: bool
    likes_count: int


class ToggleLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a project or comment."""

    def __init__(self, toggle_service: ToggleService) -> None:
        """Initialize toggle like use case.

        Args:
            toggle_service: Toggle domain service
        """
        self.toggle_service = toggle_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Args:
            request: Toggle like request

        Returns:
            Whether the target is now liked and its like count

        Raises:
            ValidationFailedError: If IDs are malformed or the type is not likeable
            NotFoundError: If the target does not exist
        """
        actor_id = UserId(parse_id(request.actor_id, "actor id"))
        target_id = parse_id(request.target_id, f"{request.target_type.value} id")

        result = await self.toggle_service.toggle_like(
            actor_id, target_id, request.target_type
        )

        return ToggleLikeResponse(
            target_id=str(target_id),
            target_type=request.target_type,
            liked=result.active,
            likes_count=result.count,
        )
