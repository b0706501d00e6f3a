"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Response, status
from pydantic import BaseModel

from agora.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from agora.domain.error import DomainError
from agora.domain.value import CommentSortOrder
from agora.interface.error import optional_actor, require_actor, to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str  # Length is checked after trimming
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str


@router.post(
    "/projects/{project_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    project_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    x_actor_id: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Comment on a project or reply to another comment.

    Args:
        project_id: Project UUID
        request: Comment content and optional parent
        create_comment_use_case: Create comment use case from DI
        x_actor_id: Authenticated actor from the gateway header

    Returns:
        Created comment details

    Raises:
        HTTPException: 400 on invalid content, cross-project parent or
            depth overflow; 404 if the project or parent is missing
    """
    actor_id = require_actor(x_actor_id)

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                project_id=project_id,
                content=request.content,
                actor_id=actor_id,
                parent_id=request.parent_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Comment creation") from e


@router.put(
    "/projects/{project_id}/comments/{comment_id}",
    response_model=UpdateCommentResponse,
)
async def update_comment(
    project_id: str,
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    x_actor_id: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's content.

    Only the comment author can edit, and deleted comments cannot be edited.

    Raises:
        HTTPException: 403 if not the author, 404 if missing or deleted
    """
    actor_id = require_actor(x_actor_id)

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                project_id=project_id,
                comment_id=comment_id,
                content=request.content,
                actor_id=actor_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Comment edit") from e


@router.delete(
    "/projects/{project_id}/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_comment(
    project_id: str,
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    x_actor_id: str | None = Header(default=None),
) -> Response:
    """Soft-delete a comment and all of its replies.

    Allowed for the author and for moderators. Deleting an already deleted
    comment succeeds and finishes any interrupted cascade.

    Raises:
        HTTPException: 403 if not allowed, 404 if the comment is missing
    """
    actor_id = require_actor(x_actor_id)

    try:
        await delete_comment_use_case.execute(
            DeleteCommentRequest(
                project_id=project_id,
                comment_id=comment_id,
                actor_id=actor_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Comment deletion") from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/projects/{project_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    project_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    sort: CommentSortOrder = Query(default=CommentSortOrder.RECENT),
    x_actor_id: str | None = Header(default=None),
) -> GetCommentsResponse:
    """List active top-level comments on a project.

    Each comment carries its author summary, live reply count, and whether
    the viewer (if any) has liked it.

    Args:
        project_id: Project UUID
        get_comments_use_case: Get comments use case from DI
        page: Page number (1-based)
        page_size: Comments per page (server default if omitted)
        sort: recent or most_liked
        x_actor_id: Optional viewer from the gateway header

    Returns:
        Page of comments with pagination info
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(
                project_id=project_id,
                page=page,
                page_size=page_size,
                sort=sort,
                viewer_id=optional_actor(x_actor_id),
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Comment listing") from e


@router.get(
    "/projects/{project_id}/comments/{comment_id}",
    response_model=GetCommentResponse,
)
async def get_comment(
    project_id: str,
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
    x_actor_id: str | None = Header(default=None),
) -> GetCommentResponse:
    """Read one active comment with its author and active direct replies.

    Raises:
        HTTPException: 404 if the comment is missing, deleted or belongs to
            another project
    """
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(
                project_id=project_id,
                comment_id=comment_id,
                viewer_id=optional_actor(x_actor_id),
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Comment lookup") from e

@router.get("/comments/{comment_id}/replies", response_model=GetRepliesResponse)
async def get_replies(
    comment_id: str,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    x_actor_id: str | None = Header(default=None),
) -> GetRepliesResponse:
    """List active direct replies to a comment, oldest first."""
    try:
        return await get_replies_use_case.execute(
            GetRepliesRequest(
                comment_id=comment_id, viewer_id=optional_actor(x_actor_id)
            )
        )
    except DomainError as e:
        raise to_http_exception(e, "Reply listing") from e
