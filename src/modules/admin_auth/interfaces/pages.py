"""Admin HTML pages."""

from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.core.config import settings
from src.modules.admin_auth.application.dependencies import get_session_validator
from src.modules.admin_auth.application.session_service import SessionValidator
from src.modules.admin_auth.domain.entities import AdminPrincipal
from src.modules.admin_auth.interfaces.cookies import get_session_cookie
from src.modules.admin_auth.interfaces.guard import require_admin_page

_PAGES_DIR = Path(__file__).resolve().parents[4] / "resources" / "pages"

templates = Jinja2Templates(directory=str(_PAGES_DIR))

router = APIRouter(prefix="/admin", tags=["admin-pages"], include_in_schema=False)

DASHBOARD_PATH = "/admin/dashboard"


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    validator: SessionValidator = Depends(get_session_validator),
):
    if validator.validate(get_session_cookie(request)) is not None:
        return RedirectResponse(url=DASHBOARD_PATH, status_code=status.HTTP_302_FOUND)
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "project_name": settings.PROJECT_NAME,
            "key_expire_minutes": max(1, settings.ACCESS_KEY_EXPIRE_SECONDS // 60),
            "max_attempts": settings.ADMIN_MAX_FAILED_ATTEMPTS,
        },
    )


@router.get("", response_class=HTMLResponse)
async def admin_root(_principal: AdminPrincipal = Depends(require_admin_page)):
    return RedirectResponse(url=DASHBOARD_PATH, status_code=status.HTTP_302_FOUND)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    principal: AdminPrincipal = Depends(require_admin_page),
):
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "project_name": settings.PROJECT_NAME,
            "admin": principal,
        },
    )
