"""Admin auth module dependencies."""

from src.core.config import settings
from src.core.infrastructure.kv import get_state_store
from src.core.infrastructure.security.jwt import (
    JWTSessionTokenService,
    get_session_token_service,
)
from src.modules.admin_auth.domain.entities import AdminIdentity
from src.modules.admin_auth.infrastructure.input_classifier import (
    PatternInputClassifier,
)
from src.modules.admin_auth.infrastructure.mailer import SMTPAccessKeyMailer
from src.modules.admin_auth.infrastructure.stores import (
    KVAccessKeyStore,
    KVIpBanList,
    KVRateLimitStore,
)

_input_classifier = PatternInputClassifier()


def get_access_key_store() -> KVAccessKeyStore:
    return KVAccessKeyStore(get_state_store())


def get_rate_limit_store() -> KVRateLimitStore:
    return KVRateLimitStore(get_state_store())


def get_ip_ban_list() -> KVIpBanList:
    return KVIpBanList(get_state_store())


def get_input_classifier() -> PatternInputClassifier:
    return _input_classifier


def get_access_key_mailer() -> SMTPAccessKeyMailer:
    return SMTPAccessKeyMailer()


def get_token_service() -> JWTSessionTokenService:
    return get_session_token_service()


def get_admin_identity() -> AdminIdentity:
    """Read the admin identity on every request so config changes apply."""
    return AdminIdentity(username=settings.ACCESS_USERNAME, email=settings.ACCESS_EMAIL)
