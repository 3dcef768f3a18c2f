from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from notebox.app import App
from notebox.core.modules.session.cookies import SESSION_COOKIE_NAME
from notebox.core.modules.session.models import AuthContext, SessionId

cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_id(session_cookie: Annotated[str | None, Depends(cookie_scheme)] = None) -> SessionId | None:
    """Session id from the cookie, if the request carries one."""
    return SessionId(session_cookie) if session_cookie else None


async def get_auth_context(
    app: Annotated[App, Depends(get_app)],
    session_id: Annotated[SessionId | None, Depends(get_session_id)],
) -> AuthContext:
    """Guard stage for protected routes: unauthenticated requests stop here with 401."""
    return await app.validate_session(session_id)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionIdDep = Annotated[SessionId | None, Depends(get_session_id)]
AuthContextDep = Annotated[AuthContext, Depends(get_auth_context)]
