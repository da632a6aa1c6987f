"""Application configuration from environment variables."""

import re
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd])\s*$")
_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """Parse a short duration such as ``"7d"``, ``"12h"``, ``"30m"`` or ``"45s"``."""
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"Invalid duration {value!r}; expected <number><s|m|h|d>")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    # Application
    app_name: str = "CareerTrack"
    environment: Literal["development", "test", "production"] = "development"
    debug: bool = False
    port: int = Field(default=5000, gt=0)
    log_level: str = "INFO"

    # Auth tokens
    jwt_secret: str = Field(min_length=16)
    jwt_expires_in: str = "7d"

    # CORS
    frontend_url: str = "http://localhost:5173"

    # Storage
    database_url: str = "sqlite+aiosqlite://"
    upload_dir: str = "uploads"
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, gt=0)

    # OTP
    otp_ttl_minutes: int = Field(default=10, gt=0)

    # OTP delivery (optional; codes are logged when unset)
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    smtp_from: str = "no-reply@careertrack.local"
    smtp_timeout: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("jwt_expires_in")
    @classmethod
    def _check_expires_in(cls, value: str) -> str:
        parse_duration(value)
        return value

    @field_validator("frontend_url")
    @classmethod
    def _check_frontend_url(cls, value: str) -> str:
        if not re.match(r"^https?://[^\s/]+", value):
            raise ValueError("FRONTEND_URL must be an http(s) URL")
        return value.rstrip("/")

    @property
    def token_lifetime(self) -> timedelta:
        return parse_duration(self.jwt_expires_in)


@lru_cache
def get_settings() -> Settings:
    return Settings()
