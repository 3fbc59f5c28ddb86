"""Application error types.

Each error carries a user-safe message and the HTTP status it maps to.
Services raise these; the API layer renders them as ``{"error": message}``.
"""

from fastapi import status


class FestivalError(Exception):
    """Base error with user-safe message and HTTP status code."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ValidationError(FestivalError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(FestivalError):
    """No valid identity: missing, unknown or expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AuthorizationError(FestivalError):
    """Valid identity without the required role or permission."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message)


class NotFoundError(FestivalError):
    """Unknown entity id."""

    status_code = status.HTTP_404_NOT_FOUND
