"""Cookie attributes for the session cookie.

A frontend served from a different origin than the API needs ``SameSite=None``,
which browsers only accept together with ``Secure``.
"""

from datetime import timedelta
from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

SESSION_COOKIE_NAME = "sessionId"

_DEFAULT_PORTS = {"http": 80, "https": 443}


class CookieAttributes(BaseModel):
    http_only: bool = True
    secure: bool
    same_site: Literal["Lax", "None"]
    max_age: int  # seconds
    path: str = "/"

    model_config = ConfigDict(frozen=True)


def normalize_origin(url: str) -> tuple[str, str, int | None]:
    """Reduce a URL to its (scheme, host, port) origin triple."""
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    port = parts.port if parts.port is not None else _DEFAULT_PORTS.get(scheme)
    return scheme, (parts.hostname or "").lower(), port


def is_cross_site(frontend_origin: str, service_origin: str) -> bool:
    return normalize_origin(frontend_origin) != normalize_origin(service_origin)


def decide_cookie_attributes(
    is_production: bool, frontend_origin: str, service_origin: str, max_age: timedelta
) -> CookieAttributes:
    """Decide session cookie attributes for a deployment. Pure, no I/O."""
    cross_site = is_cross_site(frontend_origin, service_origin)
    return CookieAttributes(
        secure=is_production or cross_site,
        same_site="None" if cross_site else "Lax",
        max_age=int(max_age.total_seconds()),
    )
