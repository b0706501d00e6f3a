"""Mapping of domain errors onto HTTP responses."""

from uuid import UUID

import logfire
from fastapi import HTTPException, status

from agora.domain.error import (
    DepthExceededError,
    DomainError,
    ForbiddenError,
    InvalidTargetError,
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
    ValidationFailedError,
)

# Checked in order, so subclasses must come before their bases
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationFailedError, status.HTTP_400_BAD_REQUEST),
    (InvalidTargetError, status.HTTP_400_BAD_REQUEST),
    (DepthExceededError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def to_http_exception(error: DomainError, operation: str) -> HTTPException:
    """Convert a domain error into the matching HTTPException.

    Client errors are logged as warnings; unmapped errors and store
    failures are logged as errors and surface as 500/503.

    Args:
        error: Domain error raised by a use case
        operation: Name of the failed operation, for logs

    Returns:
        HTTPException to raise from the route
    """
    status_code = next(
        (code for kind, code in _STATUS_BY_ERROR if isinstance(error, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

    if status_code >= 500:
        logfire.error(
            f"{operation} failed",
            error=str(error),
            error_type=type(error).__name__,
            status_code=status_code,
        )
        detail = (
            "Storage temporarily unavailable"
            if status_code == status.HTTP_503_SERVICE_UNAVAILABLE
            else "Internal error"
        )
    else:
        logfire.warn(
            f"{operation} rejected",
            error=str(error),
            error_type=type(error).__name__,
            status_code=status_code,
        )
        detail = str(error)

    return HTTPException(status_code=status_code, detail=detail)


def require_actor(actor_header: str | None) -> str:
    """Validate the actor header set by the upstream auth gateway.

    Args:
        actor_header: Raw ``X-Actor-Id`` header value

    Returns:
        Actor ID as a canonical UUID string

    Raises:
        HTTPException: 401 if the header is missing or malformed
    """
    actor_id = optional_actor(actor_header)
    if not actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return actor_id


def optional_actor(actor_header: str | None) -> str | None:
    """Read the viewer from the actor header, if a valid one is present."""
    if not actor_header:
        return None
    try:
        return str(UUID(actor_header))
    except ValueError:
        return None
