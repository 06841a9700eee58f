"""Kosmic Apps admin backend entry point."""

import asyncio
import contextlib

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.database.session import (
    check_db_health,
    dispose_engine,
    init_db,
)
from src.core.infrastructure.email.service import get_email_service
from src.core.infrastructure.kv import memory_store
from src.core.infrastructure.logging import setup_logging
from src.core.infrastructure.redis import redis_client
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
    request_validation_exception_handler,
)
from src.core.interfaces.http.routers import api_router
from src.core.interfaces.http.security_headers import security_headers_middleware
from src.modules.admin_auth.application import dependencies as admin_auth_app_deps
from src.modules.admin_auth.infrastructure import (
    dependencies as admin_auth_infra_deps,
)
from src.modules.admin_auth.interfaces.guard import (
    AdminLoginRedirect,
    admin_login_redirect_handler,
)
from src.modules.signups.application import dependencies as signups_app_deps
from src.modules.signups.infrastructure import dependencies as signups_infra_deps


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting Kosmic Apps admin backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Auth state backend: {settings.STATE_BACKEND}")

    if not settings.ACCESS_USERNAME or not settings.ACCESS_EMAIL:
        logger.warning("ACCESS_USERNAME / ACCESS_EMAIL not set, admin login disabled")

    logger.info("Initializing database connection...")
    await init_db()

    sweeper: asyncio.Task | None = None
    if settings.STATE_BACKEND == "memory":
        sweeper = asyncio.create_task(
            memory_store.run_sweeper(settings.MEMORY_STORE_SWEEP_INTERVAL_SEC)
        )

    yield

    logger.info("Shutting down Kosmic Apps admin backend...")
    if sweeper is not None:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
    if settings.STATE_BACKEND == "redis":
        await redis_client.close()
    await dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "Admin backend for the Kosmic Apps studio site.\n\n"
        "## Authentication\n\n"
        "Request a one-time access key by email, exchange it at `/admin/login` "
        "for an HttpOnly session cookie, then call the admin endpoints."
    ),
    version="0.1.0",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[admin_auth_app_deps.get_access_key_store] = (
    admin_auth_infra_deps.get_access_key_store
)
app.dependency_overrides[admin_auth_app_deps.get_rate_limit_store] = (
    admin_auth_infra_deps.get_rate_limit_store
)
app.dependency_overrides[admin_auth_app_deps.get_ip_ban_list] = (
    admin_auth_infra_deps.get_ip_ban_list
)
app.dependency_overrides[admin_auth_app_deps.get_input_classifier] = (
    admin_auth_infra_deps.get_input_classifier
)
app.dependency_overrides[admin_auth_app_deps.get_access_key_mailer] = (
    admin_auth_infra_deps.get_access_key_mailer
)
app.dependency_overrides[admin_auth_app_deps.get_session_token_service] = (
    admin_auth_infra_deps.get_token_service
)
app.dependency_overrides[admin_auth_app_deps.get_admin_identity] = (
    admin_auth_infra_deps.get_admin_identity
)

app.dependency_overrides[signups_app_deps.get_signup_repository] = (
    signups_infra_deps.get_signup_repository
)
app.dependency_overrides[signups_app_deps.get_form_interaction_repository] = (
    signups_infra_deps.get_form_interaction_repository
)
app.dependency_overrides[signups_app_deps.get_invite_mailer] = (
    signups_infra_deps.get_invite_mailer
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(AdminLoginRedirect, admin_login_redirect_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Security headers on admin responses
app.middleware("http")(security_headers_middleware())

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

app.include_router(api_router)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint.

    The admin auth flow only needs the state backend and SMTP; the database
    backs the signup views. Status is ``unhealthy`` when the state backend is
    down, ``degraded`` when only the database or email is.
    """
    db_health_result = await check_db_health()
    email_health_result = get_email_service().get_health_status()

    components = {
        "database": db_health_result.to_dict(),
        "email": email_health_result.to_dict(),
    }

    state_ok = True
    if settings.STATE_BACKEND == "redis":
        redis_health_result = await redis_client.health_check()
        components["redis"] = redis_health_result.to_dict()
        state_ok = redis_health_result.status.value == "ok"

    db_ok = db_health_result.status.value == "ok"
    email_ok = email_health_result.available

    if not state_ok:
        overall_status = "unhealthy"
    elif db_ok and email_ok:
        overall_status = "healthy"
    else:
        overall_status = "degraded"

    return {
        "status": overall_status,
        "environment": settings.ENVIRONMENT,
        "version": "0.1.0",
        "state_backend": settings.STATE_BACKEND,
        "components": components,
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {"message": "Kosmic Apps admin API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
