"""Error utilities."""

from typing import Optional, Dict, Any, Type
from fastapi import HTTPException, status

from timebase_history.exceptions import (
    CommunicationError,
    ConfigurationError,
    DataError,
    ServiceError,
    StateError,
    ValidationError,
)


_STATUS_BY_ERROR: Dict[Type[ServiceError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    CommunicationError: status.HTTP_502_BAD_GATEWAY,
    DataError: status.HTTP_502_BAD_GATEWAY,
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StateError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_error(
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> HTTPException:
    """Create an HTTP error response.

    Args:
        status_code: HTTP status code
        message: Error message
        details: Optional error details

    Returns:
        HTTPException with error details
    """
    error_content = {
        "status": "error",
        "message": message
    }
    if details:
        error_content["details"] = details

    return HTTPException(
        status_code=status_code,
        detail=error_content
    )


def to_http_error(error: ServiceError) -> HTTPException:
    """Map a service error onto an HTTP error.

    Unmapped service errors become 500.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            status_code = code
            break

    http_error = create_error(status_code, error.message, error.context)
    http_error.__cause__ = error
    return http_error
