"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
import re
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def parse_duration(value: object) -> object:
    """Accept ``"7d"``-style shorthand on top of pydantic's own timedelta formats."""
    if isinstance(value, str):
        match = _DURATION_PATTERN.match(value.lower())
        if match:
            amount, unit = match.groups()
            return timedelta(**{_DURATION_UNITS[unit]: int(amount)})
    return value


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Read-only token settings shared by the verifier, issuer and refresh policy."""

    secret: str
    algorithm: str
    ttl: timedelta
    grace_period: timedelta
    expiry_warning: timedelta


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    environment: Literal["development", "production", "test"] = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    jwt_secret: str = Field(min_length=32)
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    jwt_expires_in: timedelta = timedelta(days=7)
    jwt_refresh_grace_period: timedelta = timedelta(days=7)
    jwt_expiry_warning: timedelta = timedelta(seconds=300)
    register_role: str = "admin"

    store_backend: Literal["memory", "supabase"] = "supabase"
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None

    media_backend: Literal["memory", "cloudinary"] = "cloudinary"
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    media_folder: str = "portfolio"
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    max_upload_files: int = Field(default=10, gt=0)

    mail_backend: Literal["memory", "smtp"] = "smtp"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    contact_email_to: str | None = None
    site_name: str = "Portfolio"

    frontend_url: str | None = None

    model_config = SettingsConfigDict(env_prefix="PORTFOLIO_", env_file=".env", extra="ignore")

    @field_validator("jwt_expires_in", "jwt_refresh_grace_period", "jwt_expiry_warning", mode="before")
    @classmethod
    def _parse_duration(cls, value: object) -> object:
        return parse_duration(value)

    @field_validator("jwt_expires_in")
    @classmethod
    def _positive_ttl(cls, value: timedelta) -> timedelta:
        if value.total_seconds() < 1:
            raise ValueError("jwt_expires_in must be at least one second")
        return value

    @model_validator(mode="after")
    def _require_backend_credentials(self) -> Settings:
        missing: list[str] = []
        if self.store_backend == "supabase":
            missing += [name for name in ("supabase_url", "supabase_service_role_key") if not getattr(self, name)]
        if self.media_backend == "cloudinary":
            missing += [
                name
                for name in ("cloudinary_cloud_name", "cloudinary_api_key", "cloudinary_api_secret")
                if not getattr(self, name)
            ]
        if self.mail_backend == "smtp":
            missing += [name for name in ("smtp_user", "smtp_password", "contact_email_to") if not getattr(self, name)]
        if missing:
            raise ValueError(f"missing configuration for selected backends: {', '.join(missing)}")
        return self

    def auth_config(self) -> AuthConfig:
        return AuthConfig(
            secret=self.jwt_secret,
            algorithm=self.jwt_algorithm,
            ttl=self.jwt_expires_in,
            grace_period=self.jwt_refresh_grace_period,
            expiry_warning=self.jwt_expiry_warning,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
