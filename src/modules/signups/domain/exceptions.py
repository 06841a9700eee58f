"""Signup domain exceptions."""

from src.core.domain.exceptions import ExternalServiceError, ValidationError


class InviteFieldsMissingError(ValidationError):
    error_code = "MISSING_FIELDS"

    def __init__(self) -> None:
        super().__init__("Missing required fields")


class SignupStoreError(ExternalServiceError):
    error_code = "SIGNUP_STORE_ERROR"
