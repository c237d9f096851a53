"""
FastAPI main application for the Book Review Catalog API.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.sessions import SessionMiddleware

from api.auth import authenticate, start_session
from api.config import APIConfig, config as api_config
from api.database import CatalogService, get_service
from api.models import (
    BookDetailResponse, BookListResponse, CatalogResponse, CredentialsRequest,
    ErrorResponse, HealthResponse, LoginResponse, MessageResponse, Principal,
    ReviewRequest, ReviewsResponse, StatusBookListResponse, StatusBookResponse,
    StatusCatalogResponse, StatusErrorResponse
)
from catalog.errors import CatalogError, MissingFields
from utilities.logger import AuditLogger

# Setup logging
logger = structlog.get_logger(__name__)

catalog_router = APIRouter()
account_router = APIRouter(tags=["Accounts"])
review_router = APIRouter(prefix="/auth", tags=["Reviews"])


# Exception handlers
async def catalog_exception_handler(request: Request, exc: CatalogError):
    """Render domain errors with their mapped status."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            message=exc.message,
            error=exc.error,
            status_code=exc.status_code
        ).model_dump()
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            message=str(exc.detail),
            error="HTTPException",
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete request bodies are a client error, not 422."""
    error = MissingFields("Missing or invalid request fields")
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(
            message=error.message,
            error=error.error,
            detail=[
                {"loc": list(e.get("loc", ())), "msg": e.get("msg")}
                for e in exc.errors()
            ],
            status_code=error.status_code
        ).model_dump()
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            message="Internal server error",
            error=type(exc).__name__,
            detail=str(exc) if request.app.state.config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


def status_error(exc: CatalogError) -> JSONResponse:
    """Render a domain error in the status envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=StatusErrorResponse(message=exc.message).model_dump()
    )


# Health check endpoint (no authentication required)
@catalog_router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request, service: CatalogService = Depends(get_service)):
    """Health check endpoint."""
    info = service.health_check()
    return HealthResponse(
        status=info["status"],
        timestamp=datetime.utcnow(),
        version=request.app.state.config.api_version,
        books=info["books"],
        users=info["users"]
    )


# Account endpoints
@account_router.post("/register", response_model=MessageResponse)
async def register(body: CredentialsRequest, service: CatalogService = Depends(get_service)):
    """
    Register a new user.

    - **username**: Non-blank, unique username
    - **password**: Any non-empty password
    """
    audit = AuditLogger("api.accounts")
    try:
        service.register(body.username, body.password)
    except CatalogError as e:
        audit.log_registration(str(body.username), success=False, reason=e.error)
        raise
    audit.log_registration(body.username)
    return MessageResponse(message="User successfully registered")


@account_router.post("/login", response_model=LoginResponse)
async def login(
    body: CredentialsRequest,
    request: Request,
    service: CatalogService = Depends(get_service)
):
    """
    Log in and store a one-hour session token in the session cookie.

    The token is also returned so clients may send it as a bearer token.
    """
    audit = AuditLogger("api.accounts")
    try:
        token = service.login(body.username, body.password)
    except CatalogError as e:
        audit.log_login(str(body.username), success=False, reason=e.error)
        raise

    start_session(request, token)
    audit.log_login(body.username)
    return LoginResponse(message="User successfully logged in", access_token=token)


# Review endpoints
@review_router.put("/review/{isbn}", response_model=MessageResponse)
async def add_or_modify_review(
    isbn: str,
    body: ReviewRequest,
    principal: Principal = Depends(authenticate),
    service: CatalogService = Depends(get_service)
):
    """
    Add the caller's review for a book, or replace the one they already wrote.
    """
    audit = AuditLogger("api.reviews").bind_context(path=f"/auth/review/{isbn}")
    try:
        service.store.add_or_modify_review(isbn, principal.username, body.review)
    except CatalogError:
        audit.log_review("put", isbn, principal.username, success=False)
        raise
    audit.log_review("put", isbn, principal.username)
    return MessageResponse(message=f"Review for {isbn} successfully added/modified")


@review_router.delete("/review/{isbn}", response_model=MessageResponse)
async def delete_review(
    isbn: str,
    principal: Principal = Depends(authenticate),
    service: CatalogService = Depends(get_service)
):
    """Delete the caller's review for a book."""
    audit = AuditLogger("api.reviews").bind_context(path=f"/auth/review/{isbn}")
    try:
        service.store.delete_review(isbn, principal.username)
    except CatalogError:
        audit.log_review("delete", isbn, principal.username, success=False)
        raise
    audit.log_review("delete", isbn, principal.username)
    return MessageResponse(message="Review successfully deleted")


# Catalog endpoints
@catalog_router.get("/", response_model=CatalogResponse, tags=["Books"])
async def get_books(service: CatalogService = Depends(get_service)):
    """Get every book, keyed by ISBN."""
    return CatalogResponse(books=service.store.get_books())


@catalog_router.get("/isbn/{isbn}", response_model=BookDetailResponse, tags=["Books"])
async def get_book(isbn: str, service: CatalogService = Depends(get_service)):
    """Get a single book by ISBN."""
    return BookDetailResponse(book=service.store.get_book(isbn))


@catalog_router.get("/author/{author}", response_model=BookListResponse, tags=["Books"])
async def get_books_by_author(author: str, service: CatalogService = Depends(get_service)):
    """Get books by author (exact match, case-insensitive)."""
    return BookListResponse(books=service.store.find_by_author(author))


@catalog_router.get("/title/{title}", response_model=BookListResponse, tags=["Books"])
async def get_books_by_title(title: str, service: CatalogService = Depends(get_service)):
    """Get books whose title contains the given text (case-insensitive)."""
    return BookListResponse(books=service.store.find_by_title(title))


@catalog_router.get("/review/{isbn}", response_model=ReviewsResponse, tags=["Reviews"])
async def get_reviews(isbn: str, service: CatalogService = Depends(get_service)):
    """Get all reviews of a book."""
    return ReviewsResponse(reviews=service.store.get_reviews(isbn))


# Catalog endpoints with the status envelope
@catalog_router.get("/async/books", response_model=StatusCatalogResponse, tags=["Books"])
async def get_books_status(service: CatalogService = Depends(get_service)):
    return StatusCatalogResponse(books=service.store.get_books())


@catalog_router.get("/promise/isbn/{isbn}", response_model=StatusBookResponse, tags=["Books"])
async def get_book_status(isbn: str, service: CatalogService = Depends(get_service)):
    try:
        return StatusBookResponse(book=service.store.get_book(isbn))
    except CatalogError as e:
        return status_error(e)


@catalog_router.get("/async/author/{author}", response_model=StatusBookListResponse, tags=["Books"])
async def get_books_by_author_status(author: str, service: CatalogService = Depends(get_service)):
    try:
        return StatusBookListResponse(books=service.store.find_by_author(author))
    except CatalogError as e:
        return status_error(e)


@catalog_router.get("/async/title/{title}", response_model=StatusBookListResponse, tags=["Books"])
async def get_books_by_title_status(title: str, service: CatalogService = Depends(get_service)):
    try:
        return StatusBookListResponse(books=service.store.find_by_title(title))
    except CatalogError as e:
        return status_error(e)


def create_app(settings: Optional[APIConfig] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: API configuration; defaults to the environment-derived config

    Returns:
        FastAPI application whose stores are created at startup
    """
    settings = settings or api_config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup
        logger.info("Starting Book Review Catalog API")
        app.state.service = CatalogService.from_config(settings)

        yield

        # Shutdown
        logger.info("Shutting down Book Review Catalog API")
        app.state.service = None

    app = FastAPI(
        title=settings.api_title,
        description="""
    Book metadata and per-user reviews.

    ## Authentication

    Register with `POST /register`, then `POST /login`. The login response
    sets a session cookie holding a signed token valid for one hour, and also
    returns the token. Review changes under `/auth` need either the session
    cookie or the header:

    ```
    Authorization: Bearer your_token_here
    ```
    """,
        version=settings.api_version,
        license_info={
            "name": "MIT",
            "url": "https://opensource.org/licenses/MIT",
        },
        lifespan=lifespan
    )
    app.state.config = settings
    app.state.service = None

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.access_token_ttl_seconds,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(CatalogError, catalog_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(account_router)
    app.include_router(catalog_router)
    app.include_router(review_router)
    return app


# Create FastAPI application
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level="info"
    )
