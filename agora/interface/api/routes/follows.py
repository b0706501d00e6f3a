"""Follow routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query

from agora.application.usecase.follow import (
    GetFollowStatusRequest,
    GetFollowStatusResponse,
    GetFollowStatusUseCase,
    GetUserStatsRequest,
    GetUserStatsResponse,
    GetUserStatsUseCase,
    ListFollowsRequest,
    ListFollowsResponse,
    ListFollowsUseCase,
    ToggleFollowRequest,
    ToggleFollowResponse,
    ToggleFollowUseCase,
)
from agora.domain.error import DomainError
from agora.interface.error import optional_actor, require_actor, to_http_exception

router = APIRouter(prefix="/users", tags=["follows"], route_class=DishkaRoute)


@router.post("/{user_id}/follow", response_model=ToggleFollowResponse)
async def toggle_follow(
    user_id: str,
    toggle_follow_use_case: FromDishka[ToggleFollowUseCase],
    x_actor_id: str | None = Header(default=None),
) -> ToggleFollowResponse:
    """Follow a user, or unfollow if already following.

    Args:
        user_id: UUID of the user to follow
        toggle_follow_use_case: Toggle follow use case from DI
        x_actor_id: Authenticated actor from the gateway header

    Returns:
        New follow state plus the followee's followers count and the
        actor's following count

    Raises:
        HTTPException: If not authenticated, following self, or user not found
    """
    actor_id = require_actor(x_actor_id)

    try:
        return await toggle_follow_use_case.execute(
            ToggleFollowRequest(actor_id=actor_id, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e, "Follow toggle") from e


@router.get("/{user_id}/follow-status", response_model=GetFollowStatusResponse)
async def get_follow_status(
    user_id: str,
    get_follow_status_use_case: FromDishka[GetFollowStatusUseCase],
    x_actor_id: str | None = Header(default=None),
) -> GetFollowStatusResponse:
    """Get the follow relationship between the actor and another user.

    Returns:
        One of following, followed_by, mutual or none
    """
    actor_id = require_actor(x_actor_id)

    try:
        return await get_follow_status_use_case.execute(
            GetFollowStatusRequest(viewer_id=actor_id, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e, "Follow status lookup") from e


@router.get("/{user_id}/followers", response_model=ListFollowsResponse)
async def list_followers(
    user_id: str,
    list_follows_use_case: FromDishka[ListFollowsUseCase],
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    x_actor_id: str | None = Header(default=None),
) -> ListFollowsResponse:
    """List users following the given user, newest follow first."""
    try:
        return await list_follows_use_case.execute(
            ListFollowsRequest(
                user_id=user_id,
                direction="followers",
                page=page,
                page_size=page_size,
                viewer_id=optional_actor(x_actor_id),
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Followers listing") from e


@router.get("/{user_id}/following", response_model=ListFollowsResponse)
async def list_following(
    user_id: str,
    list_follows_use_case: FromDishka[ListFollowsUseCase],
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    x_actor_id: str | None = Header(default=None),
) -> ListFollowsResponse:
    """List users the given user follows, newest follow first."""
    try:
        return await list_follows_use_case.execute(
            ListFollowsRequest(
                user_id=user_id,
                direction="following",
                page=page,
                page_size=page_size,
                viewer_id=optional_actor(x_actor_id),
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Following listing") from e


@router.get("/{user_id}/stats", response_model=GetUserStatsResponse)
async def get_user_stats(
    user_id: str,
    get_user_stats_use_case: FromDishka[GetUserStatsUseCase],
) -> GetUserStatsResponse:
    """Read a user's interaction totals, counted from the rows on every call.

    Likes and comments are those received on the projects the user owns.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    try:
        return await get_user_stats_use_case.execute(
            GetUserStatsRequest(user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e, "User stats") from e
