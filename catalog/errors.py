"""
Error taxonomy for the catalog service.

Every failure a caller can observe is one of these exceptions. Each carries
the HTTP status it maps to, so the API layer can translate them in a single
exception handler.
"""

from typing import Optional

from fastapi import status


class CatalogError(Exception):
    """Base class for all catalog service errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    @property
    def error(self) -> str:
        """Taxonomy name reported to clients."""
        return type(self).__name__


class InvalidUsername(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid username"


class DuplicateUser(CatalogError):
    status_code = status.HTTP_409_CONFLICT
    message = "Username already exists"


class MissingFields(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username and password required"


class InvalidCredentials(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class Unauthorized(CatalogError):
    """Missing, malformed, forged or expired session token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "User not logged in"


class BookNotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Book not found"


class ReviewNotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Review not found"


class AuthorNotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "No books found for this author"


class TitleNotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "No books found with this title"
