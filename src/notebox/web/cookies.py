from typing import Literal, cast

from fastapi import Response

from notebox.core.modules.session.cookies import SESSION_COOKIE_NAME, CookieAttributes
from notebox.core.modules.session.models import SessionId


def _samesite(attrs: CookieAttributes) -> Literal["lax", "none"]:
    return cast(Literal["lax", "none"], attrs.same_site.lower())


def set_session_cookie(response: Response, session_id: SessionId, attrs: CookieAttributes) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=attrs.max_age,
        path=attrs.path,
        secure=attrs.secure,
        httponly=attrs.http_only,
        samesite=_samesite(attrs),
    )


def clear_session_cookie(response: Response, attrs: CookieAttributes) -> None:
    # Browsers only drop the cookie when path/secure/samesite match the ones it was set with
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path=attrs.path,
        secure=attrs.secure,
        httponly=attrs.http_only,
        samesite=_samesite(attrs),
    )
