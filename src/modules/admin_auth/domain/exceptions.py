"""Admin auth domain exceptions.

Each exception sets its own http_status_code and error_code and is handled
by domain_exception_handler in core/interfaces/http/exceptions.py.
Exceptions carrying a RateLimitInfo add it to the body as ``rateLimitInfo``.
"""

from typing import Any

from fastapi import status

from src.core.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainException,
    TooManyRequestsError,
    ValidationError,
)
from src.modules.admin_auth.domain.entities import RateLimitInfo


class _RateLimitInfoMixin:
    rate_limit_info: RateLimitInfo | None = None

    def response_extra(self) -> dict[str, Any]:
        if self.rate_limit_info is None:
            return {}
        return {"rateLimitInfo": self.rate_limit_info.to_dict()}


class MissingFieldsError(ValidationError):
    """Raised when a required request field is empty or absent."""

    error_code = "MISSING_FIELDS"


class InvalidEmailFormatError(ValidationError):
    """Raised when the email does not look like an address."""

    error_code = "INVALID_EMAIL_FORMAT"

    def __init__(self) -> None:
        super().__init__("Invalid email format")


class InvalidInputError(ValidationError):
    """Raised when the input classifier rejects a low-severity pattern."""

    error_code = "INVALID_INPUT"

    def __init__(self) -> None:
        super().__init__(
            "Invalid input detected. Please check your input and try again."
        )


class SecurityViolationError(AuthorizationError):
    """Raised when the input classifier finds a high-severity pattern."""

    error_code = "SECURITY_VIOLATION"

    def __init__(self) -> None:
        super().__init__("Security violation detected. Access denied.")


class AccessDeniedError(AuthorizationError):
    """Raised for requests from a banned IP."""

    error_code = "ACCESS_DENIED"

    def __init__(self) -> None:
        super().__init__("Access denied")


class UnauthorizedEmailError(AuthorizationError):
    """Raised when the email is not the configured admin email."""

    error_code = "UNAUTHORIZED_EMAIL"

    def __init__(self) -> None:
        super().__init__("Unauthorized email address")


class UnauthorizedUsernameError(_RateLimitInfoMixin, AuthorizationError):
    """Raised when the username is not the configured admin username."""

    error_code = "UNAUTHORIZED_USERNAME"

    def __init__(self, rate_limit_info: RateLimitInfo | None = None) -> None:
        self.rate_limit_info = rate_limit_info
        super().__init__("Unauthorized username")


class InvalidCredentialsError(_RateLimitInfoMixin, AuthenticationError):
    """Raised when the key is missing, expired or does not match.

    ``reason`` is logged only; the caller always sees the same message.
    """

    error_code = "INVALID_CREDENTIALS"

    KEY_NOT_FOUND = "key_not_found"
    KEY_EXPIRED = "key_expired"
    CREDENTIALS_MISMATCH = "credentials_mismatch"

    def __init__(self, reason: str, rate_limit_info: RateLimitInfo) -> None:
        self.reason = reason
        self.rate_limit_info = rate_limit_info
        super().__init__(
            "Invalid credentials. Please check your username, email, and access key."
        )


class RateLimitedError(_RateLimitInfoMixin, TooManyRequestsError):
    """Raised while a fingerprint is locked out."""

    error_code = "RATE_LIMITED"

    def __init__(self, message: str, rate_limit_info: RateLimitInfo) -> None:
        self.rate_limit_info = rate_limit_info
        super().__init__(message)


class AccessKeyDispatchError(DomainException):
    """Raised when the access key email could not be sent."""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "EMAIL_DISPATCH_FAILED"

    def __init__(self) -> None:
        super().__init__("Failed to send access key email")


class SessionRequiredError(AuthenticationError):
    """Raised by admin data endpoints when no valid session is present."""

    error_code = "SESSION_REQUIRED"

    def __init__(self) -> None:
        super().__init__("Authentication required")

    def response_extra(self) -> dict[str, Any]:
        return {"authenticated": False}
