"""Counter use cases."""

from .get_counts import GetCountsRequest, GetCountsResponse, GetCountsUseCase
from .reconcile_counters import (
    CounterEntry,
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)

__all__ = [
    "CounterEntry",
    "GetCountsRequest",
    "GetCountsResponse",
    "GetCountsUseCase",
    "ReconcileCountersRequest",
    "ReconcileCountersResponse",
    "ReconcileCountersUseCase",
]
