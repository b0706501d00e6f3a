"""Page parameter handling shared by listings."""

from typing import Optional

from agora.config import PaginationSettings
from agora.domain.error import ValidationFailedError


def resolve_page_size(
    page: int, page_size: Optional[int], settings: PaginationSettings
) -> int:
    """Validate paging parameters and fill in the default page size.

    Raises:
        ValidationFailedError: If ``page`` or ``page_size`` is out of range
    """
    size = page_size or settings.default_page_size
    if page < 1:
        raise ValidationFailedError("page must be at least 1")
    if not 1 <= size <= settings.max_page_size:
        raise ValidationFailedError(
            f"page_size must be between 1 and {settings.max_page_size}"
        )
    return size


def has_more(page: int, page_size: int, total: int) -> bool:
    return page * page_size < total
