"""
Error types raised by the route layer.

Every error carries the HTTP status, a short ``error`` label and a
human-readable ``message``; extra fields are merged into the JSON body.
"""

from typing import Any, Dict, Optional

from fastapi import status


class APIError(Exception):
    """Base class for errors rendered as a JSON error envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(
        self,
        message: str,
        error: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error
        self.extra = extra or {}
        self.headers = headers

    def to_content(self) -> Dict[str, Any]:
        content = {"error": self.error, "message": self.message}
        content.update(self.extra)
        return content


class BadRequestError(APIError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class UnauthorizedError(APIError):
    """Missing, invalid or expired credential, or a failed login."""
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class NotFoundError(APIError):
    """Unknown identifier or unmatched route."""
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class MissingTokenError(UnauthorizedError):
    error = "Access denied. No token provided."

    def __init__(self):
        super().__init__(
            "Authorization header with Bearer token is required",
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidTokenError(UnauthorizedError):
    error = "Invalid or expired token"

    def __init__(self, reason: str):
        super().__init__(reason, headers={"WWW-Authenticate": "Bearer"})
        self.reason = reason


class InvalidCredentialsError(UnauthorizedError):
    def __init__(self):
        super().__init__("Invalid username or password")


class BookNotFoundError(NotFoundError):
    def __init__(self, book_id: str):
        super().__init__(f"Book with ID {book_id} not found")
        self.book_id = book_id
