"""Get comments use case."""

from datetime import datetime

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import CommentView, QueryService
from agora.domain.value import CommentSortOrder, ProjectId, UserId


class AuthorItem(BaseModel):
    """Comment author summary."""

    user_id: str
    username: str
    name: str
    avatar_url: str | None


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    project_id: str
    parent_id: str | None
    depth: int
    content: str
    author: AuthorItem | None  # None if the account is gone upstream
    likes_count: int
    replies_count: int
    has_liked: bool
    is_edited: bool
    edited_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentItem":
        author = (
            AuthorItem(
                user_id=str(view.author.id),
                username=view.author.username,
                name=view.author.name,
                avatar_url=view.author.avatar_url,
            )
            if view.author
            else None
        )
        return cls(
            comment_id=str(view.id),
            project_id=str(view.project_id),
            parent_id=str(view.parent_id) if view.parent_id else None,
            depth=view.depth,
            content=view.content,
            author=author,
            likes_count=view.likes_count,
            replies_count=view.replies_count,
            has_liked=view.has_liked,
            is_edited=view.is_edited,
            edited_at=view.edited_at,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )


class PaginationInfo(BaseModel):
    """Paging metadata."""

    page: int
    page_size: int
    total: int
    has_next_page: bool
    has_prev_page: bool


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    project_id: str  # UUID string
    page: int = 1
    page_size: int | None = None
    sort: CommentSortOrder = CommentSortOrder.RECENT
    viewer_id: str | None = None  # Optional authenticated viewer


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    project_id: str
    comments: list[CommentItem]
    pagination: PaginationInfo


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing a project's top-level comments."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get comments use case.

        Args:
            query_service: Query projection service
        """
        self.query_service = query_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Project, paging, sort order and optional viewer

        Returns:
            One page of comments with author summaries and live reply counts
        """
        project_id = ProjectId(parse_id(request.project_id, "project id"))
        viewer_id = (
            UserId(parse_id(request.viewer_id, "viewer id"))
            if request.viewer_id
            else None
        )

        listing = await self.query_service.comment_listing(
            project_id,
            page=request.page,
            page_size=request.page_size,
            sort=request.sort,
            viewer_id=viewer_id,
        )

        return GetCommentsResponse(
            project_id=str(project_id),
            comments=[CommentItem.from_view(view) for view in listing.items],
            pagination=PaginationInfo(
                page=listing.page,
                page_size=listing.page_size,
                total=listing.total,
                has_next_page=listing.has_next_page,
                has_prev_page=listing.has_prev_page,
            ),
        )
