"""Admin auth API routes."""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from src.core.interfaces.http.request_meta import get_client_ip, get_user_agent
from src.core.interfaces.http.response import SuccessResponse
from src.modules.admin_auth.application.commands import (
    AdminLoginCommand,
    RequestAccessKeyCommand,
)
from src.modules.admin_auth.application.dependencies import (
    get_admin_login_handler,
    get_rate_limiter,
    get_request_access_key_handler,
    get_session_validator,
)
from src.modules.admin_auth.application.fingerprint import generate_fingerprint
from src.modules.admin_auth.application.handlers import (
    AdminLoginHandler,
    RequestAccessKeyHandler,
)
from src.modules.admin_auth.application.rate_limiter import RateLimiter
from src.modules.admin_auth.application.session_service import SessionValidator
from src.modules.admin_auth.interfaces.cookies import (
    clear_session_cookie,
    get_session_cookie,
    set_session_cookie,
)
from src.modules.admin_auth.interfaces.schemas import (
    AdminUserResponse,
    CheckAuthResponse,
    LoginRequest,
    RateLimitStatusResponse,
    SendAccessKeyRequest,
)

router = APIRouter(prefix="/admin", tags=["admin-auth"])


@router.post(
    "/send-access-key",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Request an access key",
    description="Email a one-time access key to the configured admin",
)
async def send_access_key(
    request: Request,
    body: SendAccessKeyRequest,
    handler: RequestAccessKeyHandler = Depends(get_request_access_key_handler),
) -> SuccessResponse:
    command = RequestAccessKeyCommand(
        username=body.username,
        email=body.email,
        client_ip=get_client_ip(request),
        user_agent=get_user_agent(request),
    )
    await handler.handle(command)
    return SuccessResponse(message="Access key sent successfully")


@router.post(
    "/login",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in with an access key",
    description="Exchange a valid access key for the admin session cookie",
)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    handler: AdminLoginHandler = Depends(get_admin_login_handler),
) -> SuccessResponse:
    command = AdminLoginCommand(
        username=body.username,
        email=body.email,
        access_key=body.access_key,
        client_ip=get_client_ip(request),
        user_agent=get_user_agent(request),
    )
    result = await handler.handle(command)
    set_session_cookie(response, result.session_token)
    return SuccessResponse(message="Login successful")


@router.get(
    "/check-auth",
    response_model=CheckAuthResponse,
    response_model_exclude_none=True,
    summary="Check the admin session",
    responses={401: {"model": CheckAuthResponse}},
)
async def check_auth(
    request: Request,
    validator: SessionValidator = Depends(get_session_validator),
):
    principal = validator.validate(get_session_cookie(request))
    if principal is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False},
        )
    return CheckAuthResponse(
        authenticated=True,
        user=AdminUserResponse(username=principal.username, email=principal.email),
    )


@router.get(
    "/rate-limit-status",
    response_model=RateLimitStatusResponse,
    summary="Failed-attempt state for the caller",
)
async def rate_limit_status(
    request: Request,
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
) -> RateLimitStatusResponse:
    fingerprint = generate_fingerprint(get_user_agent(request), get_client_ip(request))
    result = await rate_limiter.status(fingerprint)
    return RateLimitStatusResponse(
        attempts=result.attempts,
        is_blocked=result.is_blocked,
        time_remaining=result.time_remaining,
    )


@router.post(
    "/clear-session",
    response_model=SuccessResponse,
    summary="Log out",
)
async def clear_session(response: Response) -> SuccessResponse:
    clear_session_cookie(response)
    return SuccessResponse(message="Session cleared successfully")
