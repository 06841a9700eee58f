"""API router configuration."""

from fastapi import APIRouter

from src.modules.admin_auth.interfaces.pages import router as admin_pages_router
from src.modules.admin_auth.interfaces.router import router as admin_auth_router
from src.modules.signups.interfaces.router import router as signups_router

api_router = APIRouter()

# Admin auth
api_router.include_router(admin_auth_router)

# Admin data
api_router.include_router(signups_router)

# Admin pages
api_router.include_router(admin_pages_router)
