"""Base domain exceptions.

All domain errors derive from DomainException and pick their HTTP response
through the ``http_status_code`` and ``error_code`` class attributes.
"""

from typing import Any

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain errors.

    Subclasses customise the HTTP response with class attributes:
    - http_status_code: HTTP status code (default 400)
    - error_code: error code string (default "DOMAIN_ERROR")

    ``response_extra()`` may return additional top-level fields merged into
    the JSON error body.
    """

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "A domain error occurred"):
        self.message = message
        super().__init__(self.message)

    def response_extra(self) -> dict[str, Any]:
        return {}


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str | None = None):
        message = f"{entity_type} not found"
        if entity_id:
            message = f"{entity_type} with id '{entity_id}' not found"
        super().__init__(message)


class ValidationError(DomainException):
    """Raised when validation fails."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class AuthenticationError(DomainException):
    """Raised when the caller cannot be authenticated."""

    http_status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"


class AuthorizationError(DomainException):
    """Raised when authorization fails."""

    http_status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"


class TooManyRequestsError(DomainException):
    """Raised when a caller exceeded an attempt or request limit."""

    http_status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error_code = "TOO_MANY_REQUESTS"


class ConfigurationError(DomainException):
    """Raised when required server configuration is missing."""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "CONFIGURATION_ERROR"

    def __init__(self, setting_name: str):
        self.setting_name = setting_name
        super().__init__("Server configuration error")


class ExternalServiceError(DomainException):
    """Raised when a downstream service (email, database) fails."""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "EXTERNAL_SERVICE_ERROR"
