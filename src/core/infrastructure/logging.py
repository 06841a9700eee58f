"""Logging configuration with structlog integration.

Two kinds of logs:
1. loguru: general diagnostic logs
2. structlog: structured business and security events
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """Configure the structlog processor chain."""
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """Configure loguru."""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/kosmic_admin_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """Map a level name to its numeric value."""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# Business / security event logger
# ============================================================================


class BusinessEvents:
    """Structured business and security events.

    Keeps event names and fields consistent across modules. Secrets (access
    keys, session tokens) are never passed in.

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.admin_login_failed(fingerprint="1a2b", reason="key_expired", attempts=2)
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def access_key_issued(
        cls,
        email: str,
        fingerprint: str,
        **extra: Any,
    ) -> None:
        """Record a newly issued admin access key."""
        cls._log.info(
            "access_key_issued",
            event_type="admin_auth",
            email=email,
            fingerprint=fingerprint,
            **extra,
        )

    @classmethod
    def admin_login_succeeded(
        cls,
        username: str,
        email: str,
        fingerprint: str,
        **extra: Any,
    ) -> None:
        """Record a successful admin login."""
        cls._log.info(
            "admin_login_succeeded",
            event_type="admin_auth",
            username=username,
            email=email,
            fingerprint=fingerprint,
            **extra,
        )

    @classmethod
    def admin_login_failed(
        cls,
        fingerprint: str,
        reason: str,
        attempts: int,
        **extra: Any,
    ) -> None:
        """Record a failed admin login and the internal reason."""
        cls._log.warning(
            "admin_login_failed",
            event_type="admin_auth",
            fingerprint=fingerprint,
            reason=reason,
            attempts=attempts,
            **extra,
        )

    @classmethod
    def admin_locked_out(
        cls,
        fingerprint: str,
        attempts: int,
        block_seconds: int,
        **extra: Any,
    ) -> None:
        """Record a fingerprint entering the lockout window."""
        cls._log.warning(
            "admin_locked_out",
            event_type="admin_auth",
            fingerprint=fingerprint,
            attempts=attempts,
            block_seconds=block_seconds,
            **extra,
        )

    @classmethod
    def security_threat_detected(
        cls,
        ip_address: str,
        field: str,
        threats: list[dict[str, str]],
        **extra: Any,
    ) -> None:
        """Record input rejected by the classifier."""
        cls._log.warning(
            "security_threat_detected",
            event_type="security",
            ip_address=ip_address,
            field=field,
            threats=threats,
            **extra,
        )

    @classmethod
    def ip_banned(
        cls,
        ip_address: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """Record an IP ban."""
        cls._log.warning(
            "ip_banned",
            event_type="security",
            ip_address=ip_address,
            reason=reason,
            **extra,
        )

    @classmethod
    def invites_sent(
        cls,
        app: str,
        sent: int,
        failed: int,
        **extra: Any,
    ) -> None:
        """Record a beta invite batch."""
        cls._log.info(
            "invites_sent",
            event_type="signups",
            app=app,
            sent=sent,
            failed=failed,
            **extra,
        )

    @classmethod
    def email_sent(
        cls,
        to_email: str,
        email_type: str,
        success: bool,
        **extra: Any,
    ) -> None:
        """Record an outbound email."""
        level = "info" if success else "warning"
        getattr(cls._log, level)(
            "email_sent",
            event_type="email",
            to_email=to_email,
            email_type=email_type,
            success=success,
            **extra,
        )
