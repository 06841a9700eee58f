"""Admin session guards.

- ``require_admin_session``: API dependency, 401 without a valid session
- ``require_admin_page``: page dependency, redirects to the login page
"""

from fastapi import Depends, Request, status
from fastapi.responses import RedirectResponse
from loguru import logger

from src.core.config import settings
from src.modules.admin_auth.application.dependencies import get_session_validator
from src.modules.admin_auth.application.session_service import SessionValidator
from src.modules.admin_auth.domain.entities import AdminPrincipal
from src.modules.admin_auth.domain.exceptions import SessionRequiredError
from src.modules.admin_auth.interfaces.cookies import (
    clear_session_cookie,
    get_session_cookie,
)


class AdminLoginRedirect(Exception):
    """Raised by page guards; turned into a redirect to the login page."""

    def __init__(self, clear_cookie: bool):
        self.clear_cookie = clear_cookie
        super().__init__("Admin login required")


async def require_admin_session(
    request: Request,
    validator: SessionValidator = Depends(get_session_validator),
) -> AdminPrincipal:
    principal = validator.validate(get_session_cookie(request))
    if principal is None:
        raise SessionRequiredError()
    return principal


async def require_admin_page(
    request: Request,
    validator: SessionValidator = Depends(get_session_validator),
) -> AdminPrincipal:
    token = get_session_cookie(request)
    principal = validator.validate(token)
    if principal is None:
        logger.info(f"Redirecting {request.url.path} to admin login")
        raise AdminLoginRedirect(clear_cookie=token is not None)
    return principal


async def admin_login_redirect_handler(
    _request: Request, exc: AdminLoginRedirect
) -> RedirectResponse:
    response = RedirectResponse(
        url=settings.ADMIN_LOGIN_PATH, status_code=status.HTTP_302_FOUND
    )
    if exc.clear_cookie:
        clear_session_cookie(response)
    return response
