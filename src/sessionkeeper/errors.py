from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when no live session matches the requested token or user."""

    def __init__(self, message: str = "Session not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AlreadyBoundError(UserError):
    """Raised when a user already owns a live session.

    Carries the token of the existing session so the caller can reuse it.
    """

    def __init__(self, token: str, message: str = "User already has an active session") -> None:
        super().__init__(message)
        self.token = token


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidConfigError(Exception):
    """Raised when a session registry is constructed with unusable settings."""
