"""Reconcile counters use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_id
from agora.domain.service import CounterService
from agora.domain.value import CounterName, TargetType


class CounterEntry(BaseModel):
    """Reconciliation outcome for one counter."""

    counter: CounterName
    stored: int
    corrected: int
    delta: int


class ReconcileCountersRequest(BaseModel):
    """Reconcile counters request."""

    target_id: str
    target_type: TargetType


class ReconcileCountersResponse(BaseModel):
    """Reconcile counters response."""

    target_id: str
    target_type: TargetType
    entries: list[CounterEntry]
    drifted: bool


class ReconcileCountersUseCase(BaseUseCase):
    """Use case for repairing one entity's counters from the relationship rows."""

    def __init__(self, counter_service: CounterService) -> None:
        """Initialize reconcile counters use case.

        Args:
            counter_service: Counter synchronization service
        """
        self.counter_service = counter_service

    async def execute(
        self, request: ReconcileCountersRequest
    ) -> ReconcileCountersResponse:
        """Execute reconcile flow.

        Raises:
            NotFoundError: If the entity does not exist
        """
        target_id = parse_id(request.target_id, f"{request.target_type.value} id")

        report = await self.counter_service.reconcile(target_id, request.target_type)

        return ReconcileCountersResponse(
            target_id=str(target_id),
            target_type=request.target_type,
            entries=[
                CounterEntry(
                    counter=entry.counter,
                    stored=entry.stored,
                    corrected=entry.corrected,
                    delta=entry.delta,
                )
                for entry in report.entries
            ],
            drifted=report.drifted,
        )
