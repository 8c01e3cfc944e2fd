"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify a comment they don't own."""

    def __init__(self, resource: str, resource_id: str, user: str):
        super().__init__(f"User {user} is not authorized to modify {resource} {resource_id}")


class RemoteOperationError(DomainError):
    """Raised by repositories when the discussion backend rejects or fails a call."""

    pass
