"""Custom exceptions for the PACTA application."""


class PactaException(Exception):
    """Base exception for PACTA application."""

    pass


class ValidationError(PactaException):
    """Raised when validation fails."""

    pass


class NotFoundError(PactaException):
    """Raised when a resource is not found."""

    pass


class ConflictError(PactaException):
    """Raised when a change would break uniqueness or referential integrity."""

    pass


class DatabaseError(PactaException):
    """Raised when a database operation fails."""

    pass


class ConfigurationError(PactaException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(PactaException):
    """Raised when there is no authenticated user or credentials are invalid."""

    pass


class AuthorizationError(PactaException):
    """Raised when the current user's role is insufficient."""

    pass


class ServiceError(PactaException):
    """Raised when a service operation cannot be completed."""

    pass
