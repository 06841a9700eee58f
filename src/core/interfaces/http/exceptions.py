"""HTTP exception handlers.

Turns domain exceptions into the flat JSON error bodies the admin frontend
expects: ``{"error": <message>, "code": <error_code>, ...extra}``.
Each exception class picks its status via ``http_status_code``.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from src.core.domain.exceptions import ConfigurationError, DomainException


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Handle domain exceptions.

    Status code and error code are read from the exception class so modules
    can define their own errors without touching core.
    """
    status_code = getattr(exc, "http_status_code", 400)
    error_code = getattr(exc, "error_code", "DOMAIN_ERROR")

    if isinstance(exc, ConfigurationError):
        logger.error(
            f"Missing configuration {exc.setting_name} while handling "
            f"{request.method} {request.url.path}"
        )
    elif status_code >= 500:
        logger.error(f"{error_code} on {request.url.path}: {exc.message}")

    content = {"error": exc.message, "code": error_code}
    content.update(exc.response_extra())
    return JSONResponse(status_code=status_code, content=content)


async def request_validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as plain 400 errors."""
    logger.debug(f"Request validation failed: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "code": "INVALID_REQUEST"},
    )


async def global_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "code": "INTERNAL_ERROR"},
    )
