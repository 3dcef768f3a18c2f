from abc import ABC
from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Machine-readable error kinds surfaced to API clients."""

    ALREADY_EXISTS = "already_exists"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    RATE_LIMITED = "rate_limited"


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """

    kind: ClassVar[ErrorKind]


class AlreadyExistsError(UserError):
    """Raised when registering an email that is already taken."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class InvalidCredentialsError(UserError):
    """Raised on login failure, whether the email is unknown or the password is wrong."""

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request carries no valid session."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "You must be logged in to access this resource") -> None:
        super().__init__(message)


class NotFoundError(UserError):
    """Raised when a requested resource is not found or not owned by the caller."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""

    kind = ErrorKind.VALIDATION_ERROR
