class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class AuthenticationError(DomainError):
    """Raised when no identity accompanies the request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidTransitionError(DomainError):
    """Raised when a status change is not allowed by the state graph."""
