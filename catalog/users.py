"""
Credential registry for registered users.
"""

import threading
from typing import Dict

import structlog

from .errors import DuplicateUser, InvalidUsername
from .models import User

logger = structlog.get_logger(__name__)


def is_valid_username(username) -> bool:
    """A username must be a string with at least one non-blank character."""
    return isinstance(username, str) and len(username.strip()) > 0


class CredentialRegistry:
    """
    In-memory set of registered users keyed by username.

    Passwords are stored and compared in plaintext. One lock covers both
    registration and verification, so two concurrent registrations of the
    same name cannot both succeed.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def register(self, username, password: str) -> User:
        """
        Register a new user.

        Args:
            username: Requested username
            password: Password, stored as given

        Returns:
            The stored User

        Raises:
            InvalidUsername: If the username is not a non-blank string
            DuplicateUser: If the username is already taken
        """
        if not is_valid_username(username):
            raise InvalidUsername()

        with self._lock:
            if username in self._users:
                logger.warning("Duplicate registration rejected", username=username)
                raise DuplicateUser()
            user = User(username=username, password=password)
            self._users[username] = user

        logger.info("User registered", username=username)
        return user

    def verify(self, username, password) -> bool:
        """True iff a user with exactly this username and password exists."""
        with self._lock:
            user = self._users.get(username) if isinstance(username, str) else None
            return user is not None and user.password == password
