"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from catalog.models import Book


class CredentialsRequest(BaseModel):
    """Body of /register and /login. Presence is checked by the service."""
    username: Any = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password")


class ReviewRequest(BaseModel):
    """Body of PUT /auth/review/{isbn}."""
    review: str = Field(..., description="Review text")


class Principal(BaseModel):
    """Identity established for the duration of one protected request."""
    username: str = Field(..., description="Authenticated username")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str = Field(..., description="Human-readable result")


class LoginResponse(MessageResponse):
    """Login acknowledgement carrying the token also stored in the session."""
    access_token: str = Field(..., description="Signed session token")
    token_type: str = Field("bearer", description="Token type for the Authorization header")


class CatalogResponse(BaseModel):
    """Whole catalog keyed by ISBN."""
    books: Dict[str, Book] = Field(..., description="Books keyed by ISBN")


class BookDetailResponse(BaseModel):
    book: Book = Field(..., description="Book record")


class BookListResponse(BaseModel):
    books: List[Book] = Field(..., description="Matching books")


class ReviewsResponse(BaseModel):
    reviews: Dict[str, str] = Field(..., description="Reviews keyed by username")


class StatusCatalogResponse(CatalogResponse):
    """Whole catalog in the status envelope."""
    status: str = Field("success", description="Outcome")


class StatusBookResponse(BookDetailResponse):
    status: str = Field("success", description="Outcome")


class StatusBookListResponse(BookListResponse):
    status: str = Field("success", description="Outcome")


class StatusErrorResponse(BaseModel):
    """Failure in the status envelope."""
    status: str = Field("error", description="Outcome")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Error response model."""
    message: str = Field(..., description="Error message")
    error: str = Field(..., description="Error type")
    detail: Optional[Any] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books: int = Field(..., description="Books in the catalog")
    users: int = Field(..., description="Registered users")
