"""List followers/following use case."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import QueryService
from agora.domain.value import UserId


class FollowItem(BaseModel):
    """User entry in a follow listing."""

    user_id: str
    username: str
    name: str
    avatar_url: str | None
    followed_at: datetime
    is_followed_by_current_user: bool


class ListFollowsRequest(BaseModel):
    """List follows request."""

    user_id: str
    direction: Literal["followers", "following"]
    page: int = 1
    page_size: int | None = None
    viewer_id: str | None = None  # Optional authenticated viewer


class ListFollowsResponse(BaseModel):
    """List follows response."""

    user_id: str
    items: list[FollowItem]
    total: int
    page: int
    page_size: int
    has_next_page: bool


class ListFollowsUseCase(BaseUseCase):
    """Use case for paging through a user's followers or followed users."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize list follows use case.

        Args:
            query_service: Query projection service
        """
        self.query_service = query_service

    async def execute(self, request: ListFollowsRequest) -> ListFollowsResponse:
        """Execute list follows flow.

        Raises:
            ValidationFailedError: If IDs or paging parameters are invalid
            NotFoundError: If the user does not exist
        """
        user_id = UserId(parse_id(request.user_id, "user id"))
        viewer_id = (
            UserId(parse_id(request.viewer_id, "viewer id"))
            if request.viewer_id
            else None
        )

        list_page = (
            self.query_service.followers
            if request.direction == "followers"
            else self.query_service.following
        )
        listing = await list_page(
            user_id,
            page=request.page,
            page_size=request.page_size,
            viewer_id=viewer_id,
        )

        return ListFollowsResponse(
            user_id=str(user_id),
            items=[
                FollowItem(
                    user_id=str(entry.user.id),
                    username=entry.user.username,
                    name=entry.user.name,
                    avatar_url=entry.user.avatar_url,
                    followed_at=entry.followed_at,
                    is_followed_by_current_user=entry.is_followed_by_viewer,
                )
                for entry in listing.items
            ],
            total=listing.total,
            page=listing.page,
            page_size=listing.page_size,
            has_next_page=listing.has_next_page,
        )
