from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Tenant RBAC"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True  # Set to False in production

    # Security
    log_user_emails: bool = False  # Set to False in production for GDPR compliance
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]  # Allowed domains for APP_URL

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10  # Timeout for email API calls
    app_url: str = "http://localhost:3000"  # Frontend URL for invitation links

    # Invitations
    invite_expire_days: int = 7

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate APP_URL is from allowed domain list to prevent SSRF in emails."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        parsed = urlparse(v)
        hostname = parsed.hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v

    @field_validator("invite_expire_days")
    @classmethod
    def validate_invite_expire_days(cls, v: int) -> int:
        if v < 1:
            raise ValueError("INVITE_EXPIRE_DAYS must be at least 1")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
