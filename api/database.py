"""
Service context for the API.

Owns the catalog store, the credential registry and the token issuer for the
lifetime of the application. Handlers receive it through ``get_service``.
"""

from pathlib import Path
from typing import Dict

import structlog
from fastapi import HTTPException, Request, status

from api.config import APIConfig
from catalog.database import CatalogStore
from catalog.errors import InvalidCredentials, MissingFields
from catalog.seed import load_books
from catalog.tokens import TokenIssuer
from catalog.users import CredentialRegistry

logger = structlog.get_logger(__name__)


class CatalogService:
    """Stores and token issuer shared by every request handler."""

    def __init__(
        self,
        store: CatalogStore,
        registry: CredentialRegistry,
        issuer: TokenIssuer
    ):
        self.store = store
        self.registry = registry
        self.issuer = issuer

    @classmethod
    def from_config(cls, settings: APIConfig) -> "CatalogService":
        """
        Build a fresh service from settings.

        Args:
            settings: API configuration

        Returns:
            CatalogService with a newly seeded catalog and no users
        """
        books_file = Path(settings.books_file) if settings.books_file else None
        store = CatalogStore(load_books(books_file))
        issuer = TokenIssuer(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl_seconds=settings.access_token_ttl_seconds
        )
        logger.info("Catalog service created", books=len(store))
        return cls(store, CredentialRegistry(), issuer)

    def register(self, username, password) -> None:
        """
        Register a user.

        Raises:
            MissingFields: If username or password is absent or empty
            InvalidUsername: If the username is not a non-blank string
            DuplicateUser: If the username is taken
        """
        if not username or not password:
            raise MissingFields()
        self.registry.register(username, password)

    def login(self, username, password) -> str:
        """
        Check credentials and mint a session token.

        Returns:
            Encoded token for the user

        Raises:
            MissingFields: If username or password is absent or empty
            InvalidCredentials: If no user matches
        """
        if not username or not password:
            raise MissingFields()
        if not self.registry.verify(username, password):
            raise InvalidCredentials()
        return self.issuer.issue(username)

    def health_check(self) -> Dict:
        return {
            "status": "healthy",
            "books": len(self.store),
            "users": len(self.registry)
        }


def get_service(request: Request) -> CatalogService:
    """Dependency returning the service created at application startup."""
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog service not available"
        )
    return service
