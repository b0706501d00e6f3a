"""Get counts use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import QueryService
from agora.domain.value import TargetType


class GetCountsRequest(BaseModel):
    """Get counts request."""

    target_id: str
    target_type: TargetType


class GetCountsResponse(BaseModel):
    """Get counts response."""

    target_id: str
    target_type: TargetType
    counts: dict[str, int]  # Counter name -> stored value


class GetCountsUseCase(BaseUseCase):
    """Use case for reading an entity's stored counters."""

    def __init__(self, query_service: QueryService) -> None:
        """Initialize get counts use case.

        Args:
            query_service: Query projection service
        """
        self.query_service = query_service

    async def execute(self, request: GetCountsRequest) -> GetCountsResponse:
        """Execute get counts flow.

        Raises:
            NotFoundError: If the entity does not exist
        """
        target_id = parse_id(request.target_id, f"{request.target_type.value} id")

        counts = await self.query_service.counts(target_id, request.target_type)

        return GetCountsResponse(
            target_id=str(target_id),
            target_type=request.target_type,
            counts={counter.value: value for counter, value in counts.items()},
        )
