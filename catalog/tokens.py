"""
Signed, time-limited session tokens.

Tokens are HS256 JWTs carrying ``{"data": username, "iat", "exp"}``. Nothing
is stored server side: a token is valid as long as its signature checks out
and it has not expired.
"""

import time
from typing import Callable, Dict

import structlog
from jose import JWTError, jwt

from .errors import Unauthorized
from .users import is_valid_username

logger = structlog.get_logger(__name__)


class TokenIssuer:
    """Mints and verifies session tokens with a shared signing secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize the issuer.

        Args:
            secret: Signing secret
            algorithm: JWT signing algorithm
            ttl_seconds: Lifetime of each token from issuance
            clock: Source of the issue timestamp
        """
        self.secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def claims_for(self, username: str) -> Dict:
        issued_at = int(self.clock())
        return {
            "data": username,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds
        }

    def issue(self, username: str) -> str:
        """Mint a token binding the username."""
        return jwt.encode(self.claims_for(username), self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> str:
        """
        Verify a token and return the username it carries.

        Args:
            token: Encoded token

        Returns:
            Username from the ``data`` claim

        Raises:
            Unauthorized: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False}
            )
        except JWTError as e:
            logger.debug("Token rejected", error=str(e))
            raise Unauthorized("User not authenticated")

        expires_at = payload.get("exp")
        if not isinstance(expires_at, int):
            raise Unauthorized("User not authenticated")
        if expires_at <= int(self.clock()):
            raise Unauthorized("Token expired")

        username = payload.get("data")
        if not is_valid_username(username):
            raise Unauthorized("User not authenticated")
        return username
