"""Domain layer errors.

Every error carries a stable ``code`` that the interface layer copies into
the response body.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Input failed a domain validation rule (empty or oversized text)."""

    code = "validation_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the caller may not perform an action on a resource."""

    code = "forbidden"

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the resource's current state."""

    code = "invalid_state"


class DepthLimitExceededError(DomainError):
    """Raised when a reply would nest deeper than the thread allows."""

    code = "depth_limit_exceeded"

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Maximum reply depth reached ({max_depth} levels)")


class AlreadyReportedError(DomainError):
    """Raised when a user reports the same comment twice."""

    code = "already_reported"

    def __init__(self, comment_id: str, reporter_id: str):
        super().__init__(f"User {reporter_id} has already reported comment {comment_id}")


class StaleRecordError(DomainError):
    """Raised by a repository when a conditional write lost a race."""

    code = "conflict"

    def __init__(self, resource: str, identifier: str, expected_version: int):
        self.resource = resource
        self.identifier = identifier
        self.expected_version = expected_version
        super().__init__(
            f"{resource} {identifier} was modified concurrently "
            f"(expected version {expected_version})"
        )
