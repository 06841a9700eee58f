"""Application configuration."""

import secrets
import warnings
from typing import Annotated, Any, Literal, Self

from pydantic import (
    AnyUrl,
    BeforeValidator,
    EmailStr,
    HttpUrl,
    computed_field,
    model_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_comma_list(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Kosmic Apps Admin"
    SERVER_PORT: int = 8000
    ROOTPATH: str = ""
    SECRET_KEY: str = secrets.token_urlsafe(32)
    FRONTEND_HOST: str = "http://localhost:3000"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    JWT_ALGORITHM: str = "HS256"
    # Peers (IPs or CIDRs) whose X-Forwarded-For / X-Real-IP headers are
    # honoured. Empty: the socket peer is always the client.
    TRUSTED_PROXIES: Annotated[
        list[str] | str, BeforeValidator(parse_comma_list)
    ] = []

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_comma_list)
    ] = []

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    # Admin identity (single authorized administrator)
    ACCESS_USERNAME: str | None = None
    ACCESS_EMAIL: str | None = None

    # Access keys
    ACCESS_KEY_LENGTH: int = 12
    ACCESS_KEY_EXPIRE_SECONDS: int = 120  # 2 minutes

    # Failed-attempt lockout
    ADMIN_MAX_FAILED_ATTEMPTS: int = 4
    ADMIN_LOCKOUT_MINUTES: int = 30
    ADMIN_ATTEMPT_WINDOW_HOURS: int = 24  # idle records are dropped after this
    ADMIN_IP_BAN_HOURS: int = 24

    # Admin session cookie
    ADMIN_SESSION_COOKIE_NAME: str = "admin-session"
    ADMIN_SESSION_MAX_AGE_HOURS: int = 24
    ADMIN_SESSION_COOKIE_SECURE: bool | None = None
    ADMIN_LOGIN_PATH: str = "/admin/login"

    @computed_field
    @property
    def admin_session_cookie_secure(self) -> bool:
        if self.ADMIN_SESSION_COOKIE_SECURE is not None:
            return self.ADMIN_SESSION_COOKIE_SECURE
        return self.ENVIRONMENT != "local"

    # Shared auth state (access keys, lockouts, IP bans)
    STATE_BACKEND: Literal["memory", "redis"] = "memory"
    MEMORY_STORE_SWEEP_INTERVAL_SEC: int = 300

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # PostgreSQL (signups, form interactions)
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "kosmic"

    @computed_field
    @property
    def database_url_object(self) -> MultiHostUrl:
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        return str(self.database_url_object)

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"

    # SMTP
    SMTP_TLS: bool = True
    SMTP_SSL: bool = False
    SMTP_PORT: int = 587
    SMTP_HOST: str | None = None
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None
    EMAILS_FROM_EMAIL: EmailStr | None = None
    EMAILS_FROM_NAME: str | None = None
    EMAIL_ENABLED: bool = True
    EMAIL_SEND_TIMEOUT_SEC: float = 15.0
    SUPPORT_EMAIL: str = "hello@kosmicapps.com"

    @model_validator(mode="after")
    def _set_default_emails_from(self) -> Self:
        if not self.EMAILS_FROM_NAME:
            self.EMAILS_FROM_NAME = self.PROJECT_NAME
        return self

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("SECRET_KEY", self.SECRET_KEY)
        return self


settings = Settings()
