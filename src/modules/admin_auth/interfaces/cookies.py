"""Admin session cookie helpers."""

from fastapi import Request, Response

from src.core.config import settings


def get_session_cookie(request: Request) -> str | None:
    return request.cookies.get(settings.ADMIN_SESSION_COOKIE_NAME)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.ADMIN_SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ADMIN_SESSION_MAX_AGE_HOURS * 3600,
        path="/",
        secure=settings.admin_session_cookie_secure,
        httponly=True,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.ADMIN_SESSION_COOKIE_NAME,
        path="/",
        secure=settings.admin_session_cookie_secure,
        httponly=True,
        samesite="strict",
    )
