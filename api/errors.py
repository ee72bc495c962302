"""
Error types raised by the bookstore services.

Each error carries the HTTP status it maps to; the application's exception
handler turns them into ``ErrorResponse`` bodies.
"""

from typing import Dict, Optional

from fastapi import status


class BookstoreError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class InvalidInputError(BookstoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class DuplicateUsernameError(BookstoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username already exists"


class AuthenticationFailedError(BookstoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class MissingAuthorizationError(BookstoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authorization header missing"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidOrExpiredTokenError(BookstoreError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class NotFoundError(BookstoreError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConfigurationError(BookstoreError):
    """Server is missing required configuration, e.g. the token signing secret."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
