"""Base exceptions for the application."""

from typing import Dict, Any, Optional


class ServiceError(Exception):
    """Base class for service errors.

    All service-specific exceptions inherit from this class. The error
    context carries extra information that ends up in the error response.
    """
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Initialize service error.

        Args:
            message: Error message
            context: Optional error context
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ValidationError(ServiceError):
    """Raised when request parameters are rejected."""
    pass


class ConfigurationError(ServiceError):
    """Raised when configuration is missing or invalid.

    Used for:
    - Missing config file
    - Invalid YAML
    - Config schema violations
    """
    pass


class CommunicationError(ServiceError):
    """Raised when talking to the Timebase server fails.

    Used for:
    - Connection failures and timeouts
    - Non-success HTTP status codes
    """
    pass


class DataError(ServiceError):
    """Raised when a Timebase payload cannot be decoded."""
    pass


class StateError(ServiceError):
    """Raised when the service is not in a state to handle a request."""
    pass
