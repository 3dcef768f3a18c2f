from datetime import timedelta
from typing import Literal

from pydantic import field_validator
from limits import parse_many
from pydantic_settings import BaseSettings

from notebox.core.modules.session.cookies import normalize_origin


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL, the path names the database, e.g. mongodb://localhost/notebox
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    environment: Literal["development", "production"] = "development"
    frontend_url: str = "http://localhost:5173"  # Public origin of the frontend application
    service_url: str = "http://localhost:3000"  # Public origin this API is served from
    session_max_age: timedelta = timedelta(days=7)
    session_cleanup_interval: timedelta = timedelta(hours=1)  # How often expired sessions are swept
    rate_limit: str = "100/minute"  # Per client address, slowapi/limits notation

    model_config = {
        "env_file": [".env"],
        "env_prefix": "NOTEBOX_",
        "extra": "ignore",
    }

    @field_validator("frontend_url", "service_url")
    @classmethod
    def validate_origin(cls, value: str) -> str:
        """Reject anything the cookie policy could not compare as an origin."""
        scheme, host, _ = normalize_origin(value)  # ValueError on a malformed port
        if scheme not in ("http", "https") or not host:
            raise ValueError(f"Expected an http(s) origin such as https://app.example.com, got {value!r}")
        return value

    @field_validator("rate_limit")
    @classmethod
    def validate_rate_limit(cls, value: str) -> str:
        parse_many(value)  # ValueError on anything slowapi could not enforce
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
