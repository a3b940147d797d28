"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./gametracker.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key for signing JWT tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    login_max_attempts: int = Field(
        default=5,
        description="Failed logins from one client before further attempts are refused",
        gt=0,
    )
    login_lockout_minutes: int = Field(
        default=15,
        description="Minutes a client stays locked out after too many failed logins",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to decide which calendar day it is for release checks",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )

    # Mail transport
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification messages",
        min_length=3,
    )
    mail_default_recipient: str | None = Field(
        default=None,
        description="Fallback recipient used when a user has no email and the directory has none",
    )

    # Push notifications (ntfy)
    ntfy_base_url: str | None = Field(
        default=None, description="Base URL of the ntfy server, e.g. https://ntfy.sh"
    )
    ntfy_default_topic: str | None = Field(
        default=None, description="Topic used when a user has no personal topic"
    )

    # Directory service
    ldap_url: str | None = Field(default=None, description="LDAP server URL")
    ldap_bind_dn: str | None = Field(default=None, description="Service account DN")
    ldap_bind_password: str | None = Field(default=None, description="Service account password")
    ldap_search_base: str | None = Field(default=None, description="Base DN for user searches")
    ldap_required_group: str | None = Field(
        default=None,
        description="Group a directory user must belong to: a full DN or a bare group name",
    )

    # Catalog and pricing providers
    igdb_client_id: str | None = Field(default=None)
    igdb_bearer_token: str | None = Field(default=None)
    rawg_api_key: str | None = Field(default=None)
    thegamesdb_api_key: str | None = Field(default=None)
    steam_country_code: str = Field(
        default="il", description="Steam store country used for price lookups"
    )

    provider_timeout_seconds: float = Field(
        default=10.0, description="Upper bound for a single catalog or pricing call", gt=0
    )
    dispatch_timeout_seconds: float = Field(
        default=15.0, description="Upper bound for a single delivery channel call", gt=0
    )

    # Scheduled jobs
    scheduler_enabled: bool = Field(default=True)
    reminder_sweep_hour: int = Field(default=8, ge=0, le=23)
    price_refresh_day_of_week: str = Field(default="mon")
    price_refresh_hour: int = Field(default=3, ge=0, le=23)

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def email_enabled(self) -> bool:
        return bool(self.sendgrid_api_key and self.sendgrid_sender)

    @property
    def ldap_enabled(self) -> bool:
        return bool(
            self.ldap_url
            and self.ldap_bind_dn
            and self.ldap_bind_password
            and self.ldap_search_base
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
