"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from agora.domain.error import ValidationFailedError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_id(value: str, label: str) -> UUID:
    """Parse a UUID string from a request.

    Raises:
        ValidationFailedError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise ValidationFailedError(f"Invalid {label}: {value!r}")
