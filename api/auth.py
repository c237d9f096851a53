"""
Session handling and authorization for the FastAPI API.

Login stores the signed token in the caller's session cookie. Every protected
route depends on ``authenticate``, which derives the caller's identity from
that token afresh on each request.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.database import CatalogService, get_service
from api.models import Principal
from catalog.errors import Unauthorized
from utilities.logger import AuditLogger


SESSION_KEY = "authorization"

# Security scheme; a missing header is not an error because the session may carry the token
security = HTTPBearer(auto_error=False)


def start_session(request: Request, token: str) -> None:
    """Attach a freshly minted token to the caller's session."""
    request.session[SESSION_KEY] = {"access_token": token}


def session_token(request: Request) -> Optional[str]:
    """Token held in the caller's session, if any."""
    authorization = request.session.get(SESSION_KEY)
    if isinstance(authorization, dict):
        return authorization.get("access_token")
    return None


async def authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service: CatalogService = Depends(get_service)
) -> Principal:
    """
    Resolve the authenticated user for a protected request.

    An explicit ``Authorization: Bearer`` header wins over the session.

    Args:
        request: Incoming request with its session
        credentials: Optional bearer credentials
        service: Catalog service holding the token issuer

    Returns:
        Principal for the token's username

    Raises:
        Unauthorized: If no token is present or it fails verification
    """
    audit = AuditLogger("api.auth")
    token = credentials.credentials if credentials else session_token(request)

    if not token:
        audit.log_rejected("missing token", path=request.url.path)
        raise Unauthorized()

    try:
        username = service.issuer.decode(token)
    except Unauthorized as e:
        audit.log_rejected(e.message, path=request.url.path)
        raise

    return Principal(username=username)
