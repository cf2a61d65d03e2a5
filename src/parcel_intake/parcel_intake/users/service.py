from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError
from .repository import UserRepository

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Error logging in"


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    email: str
    full_name: str


class AuthService:
    """Use case: authenticate an operator (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = self._users.get_by_email(email) if email else None
        if not user or not user.is_active:
            logger.info("Login rejected for %r: unknown or inactive user", email)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Login rejected for %r: bad password", email)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        logger.info("User %s logged in", user.user_id)
        return SessionUser(user_id=user.user_id, email=user.email, full_name=user.full_name)
