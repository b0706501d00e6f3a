"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationFailedError(DomainError):
    """Raised when input fails validation (content length, ids, target types)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ParentNotFoundError(NotFoundError):
    """Raised when a reply targets a missing or deleted parent comment."""

    def __init__(self, identifier: str):
        super().__init__("Parent comment", identifier)


class ConflictError(DomainError):
    """Raised when a relationship tuple already exists.

    Toggles recover from this locally; it never reaches API callers.
    """

    def __init__(self, relationship: str, key: str):
        self.relationship = relationship
        self.key = key
        super().__init__(f"{relationship} already exists: {key}")


class InvalidTargetError(DomainError):
    """Raised when an interaction targets something it structurally cannot."""

    pass


class ParentWrongProjectError(InvalidTargetError):
    """Raised when a reply's parent belongs to a different project."""

    def __init__(self, parent_id: str, project_id: str):
        super().__init__(
            f"Parent comment {parent_id} does not belong to project {project_id}"
        )


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than the configured maximum."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Maximum comment depth exceeded: {depth} > {max_depth}"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to edit content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to edit {resource} {resource_id}"
        )


class ForbiddenError(DomainError):
    """Raised when the authorization gate denies an action."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class StoreUnavailableError(DomainError):
    """Raised on storage infrastructure failures.

    The engine does not retry these; callers decide on backoff.
    """

    pass
