from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Response
from pydantic import AfterValidator, BaseModel, Field

from notebox.core.modules.user.models import UserView
from notebox.web.cookies import clear_session_cookie, set_session_cookie
from notebox.web.deps import AppDep, AuthContextDep, SessionIdDep
from notebox.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


def check_email_format(value: str) -> str:
    """Reject malformed addresses but keep the string exactly as sent, accounts are matched verbatim."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


Email = Annotated[str, AfterValidator(check_email_format)]


class RegisterRequest(BaseModel):
    """User registration data."""

    email: Email = Field(..., description="User email address", examples=["user@example.com"])
    password: str = Field(..., min_length=8, description="User password (minimum 8 characters)")
    name: str | None = Field(None, description="User's full name (optional)", examples=["John Doe"])


class LoginRequest(BaseModel):
    """User login credentials."""

    email: Email = Field(..., description="User email address", examples=["user@example.com"])
    password: str = Field(..., description="User password")


class UserResponse(BaseModel):
    user: UserView


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Logged out successfully"])


@router.post(
    "/auth/register",
    summary="Register a new user",
    description="Create a new user account with email and password. Returns user data and sets session cookie.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "User successfully registered"},
        400: {"model": ErrorResponse, "description": "Validation error - invalid input"},
        409: {"model": ErrorResponse, "description": "User already exists"},
    },
)
async def register(body: RegisterRequest, app: AppDep, response: Response) -> UserResponse:
    result = await app.register(body.email, body.password, body.name)
    set_session_cookie(response, result.session_id, app.session_cookie_attributes())
    return UserResponse(user=result.user)


@router.post(
    "/auth/login",
    summary="Login user",
    description="Authenticate user with email and password. Returns user data and sets session cookie.",
    operation_id="login",
    responses={
        200: {"description": "Login successful"},
        400: {"model": ErrorResponse, "description": "Validation error - invalid input"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(body: LoginRequest, app: AppDep, response: Response) -> UserResponse:
    result = await app.login(body.email, body.password)
    set_session_cookie(response, result.session_id, app.session_cookie_attributes())
    return UserResponse(user=result.user)


@router.post(
    "/auth/logout",
    summary="Logout user",
    description="Delete the current session, if any, and clear the cookie. Succeeds without a session too.",
    operation_id="logout",
    responses={200: {"description": "Logout successful"}},
)
async def logout(app: AppDep, session_id: SessionIdDep, response: Response) -> MessageResponse:
    await app.logout(session_id)
    clear_session_cookie(response, app.session_cookie_attributes())
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/auth/me",
    summary="Get current user",
    description="Get the currently authenticated user's information.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user information"},
        401: {"model": ErrorResponse, "description": "Unauthorized - no valid session"},
    },
)
async def me(app: AppDep, ctx: AuthContextDep) -> UserResponse:
    return UserResponse(user=await app.get_current_user(ctx))
