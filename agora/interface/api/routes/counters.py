"""Counter routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from agora.application.usecase.counter import (
    GetCountsRequest,
    GetCountsResponse,
    GetCountsUseCase,
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)
from agora.domain.error import DomainError
from agora.domain.value import TargetType
from agora.interface.error import require_actor, to_http_exception

router = APIRouter(prefix="/counters", tags=["counters"], route_class=DishkaRoute)


@router.get("/{target_type}/{target_id}", response_model=GetCountsResponse)
async def get_counts(
    target_type: TargetType,
    target_id: str,
    get_counts_use_case: FromDishka[GetCountsUseCase],
) -> GetCountsResponse:
    """Get the stored counters of a project, comment or user."""
    try:
        return await get_counts_use_case.execute(
            GetCountsRequest(target_id=target_id, target_type=target_type)
        )
    except DomainError as e:
        raise to_http_exception(e, "Counter lookup") from e


@router.post(
    "/{target_type}/{target_id}/reconcile",
    response_model=ReconcileCountersResponse,
)
async def reconcile_counters(
    target_type: TargetType,
    target_id: str,
    reconcile_counters_use_case: FromDishka[ReconcileCountersUseCase],
    x_actor_id: str | None = Header(default=None),
) -> ReconcileCountersResponse:
    """Recompute a target's counters from the relationship records.

    Drifted counters are overwritten with the recomputed values.

    Args:
        target_type: project, comment or user
        target_id: Target UUID
        reconcile_counters_use_case: Reconcile use case from DI
        x_actor_id: Authenticated actor from the gateway header

    Returns:
        Stored and corrected values for every counter of the target
    """
    require_actor(x_actor_id)

    try:
        return await reconcile_counters_use_case.execute(
            ReconcileCountersRequest(target_id=target_id, target_type=target_type)
        )
    except DomainError as e:
        raise to_http_exception(e, "Counter reconciliation") from e
