"""Admin auth application dependencies.

Defines dependency providers for the interfaces layer without importing
infrastructure. main.py overrides the stubs with concrete providers.
"""

from typing import NoReturn

from fastapi import Depends

from src.core.domain.ports.token import SessionTokenService
from src.modules.admin_auth.application.form_security import FormSecurityService
from src.modules.admin_auth.application.handlers import (
    AdminLoginHandler,
    RequestAccessKeyHandler,
)
from src.modules.admin_auth.application.rate_limiter import RateLimiter
from src.modules.admin_auth.application.session_service import SessionValidator
from src.modules.admin_auth.domain.entities import AdminIdentity
from src.modules.admin_auth.domain.ports import AccessKeyMailer, InputClassifier
from src.modules.admin_auth.domain.repository import (
    AccessKeyStore,
    IpBanList,
    RateLimitStore,
)


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_access_key_store() -> AccessKeyStore:
    _missing_dependency("AccessKeyStore")


async def get_rate_limit_store() -> RateLimitStore:
    _missing_dependency("RateLimitStore")


async def get_ip_ban_list() -> IpBanList:
    _missing_dependency("IpBanList")


async def get_input_classifier() -> InputClassifier:
    _missing_dependency("InputClassifier")


async def get_access_key_mailer() -> AccessKeyMailer:
    _missing_dependency("AccessKeyMailer")


async def get_session_token_service() -> SessionTokenService:
    _missing_dependency("SessionTokenService")


async def get_admin_identity() -> AdminIdentity:
    _missing_dependency("AdminIdentity")


async def get_rate_limiter(
    store: RateLimitStore = Depends(get_rate_limit_store),
) -> RateLimiter:
    return RateLimiter(store)


async def get_form_security_service(
    classifier: InputClassifier = Depends(get_input_classifier),
    ban_list: IpBanList = Depends(get_ip_ban_list),
) -> FormSecurityService:
    return FormSecurityService(classifier, ban_list)


async def get_session_validator(
    token_service: SessionTokenService = Depends(get_session_token_service),
) -> SessionValidator:
    return SessionValidator(token_service)


async def get_request_access_key_handler(
    key_store: AccessKeyStore = Depends(get_access_key_store),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
    form_security: FormSecurityService = Depends(get_form_security_service),
    mailer: AccessKeyMailer = Depends(get_access_key_mailer),
    admin: AdminIdentity = Depends(get_admin_identity),
) -> RequestAccessKeyHandler:
    return RequestAccessKeyHandler(
        key_store, rate_limiter, form_security, mailer, admin
    )


async def get_admin_login_handler(
    key_store: AccessKeyStore = Depends(get_access_key_store),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
    form_security: FormSecurityService = Depends(get_form_security_service),
    token_service: SessionTokenService = Depends(get_session_token_service),
    admin: AdminIdentity = Depends(get_admin_identity),
) -> AdminLoginHandler:
    return AdminLoginHandler(
        key_store, rate_limiter, form_security, token_service, admin
    )
