"""Like routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from agora.application.usecase.like import (
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from agora.domain.error import DomainError
from agora.domain.value import TargetType
from agora.interface.error import require_actor, to_http_exception

router = APIRouter(tags=["likes"], route_class=DishkaRoute)


@router.post("/projects/{project_id}/like", response_model=ToggleLikeResponse)
async def toggle_project_like(
    project_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    x_actor_id: str | None = Header(default=None),
) -> ToggleLikeResponse:
    """Like a project, or remove the like if the actor already likes it.

    Args:
        project_id: Project UUID
        toggle_like_use_case: Toggle like use case from DI
        x_actor_id: Authenticated actor from the gateway header

    Returns:
        New like state and the project's like count

    Raises:
        HTTPException: If not authenticated or the project does not exist
    """
    actor_id = require_actor(x_actor_id)

    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(
                actor_id=actor_id,
                target_id=project_id,
                target_type=TargetType.PROJECT,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Project like toggle") from e


@router.post("/comments/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_comment_like(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    x_actor_id: str | None = Header(default=None),
) -> ToggleLikeResponse:
    """Like a comment, or remove the like if the actor already likes it.

    Deleted comments cannot be liked.

    Args:
        comment_id: Comment UUID
        toggle_like_use_case: Toggle like use case from DI
        x_actor_id: Authenticated actor from the gateway header

    Returns:
        New like state and the comment's like count

    Raises:
        HTTPException: If not authenticated or the comment is missing or deleted
    """
    actor_id = require_actor(x_actor_id)

    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(
                actor_id=actor_id,
                target_id=comment_id,
                target_type=TargetType.COMMENT,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Comment like toggle") from e
