class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInputError(ValidationError):
    """Raised when a hard precondition on numeric input is violated."""


class InvalidStateError(DomainError):
    """Raised when an entity is missing or not in the state an operation needs."""


class StaleClaimError(InvalidStateError):
    """Raised when a claim changed underneath a guarded status update."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
