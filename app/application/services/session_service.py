from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ...core.errors import InvalidCredentials, UserAlreadyExists, UserNotFound, ValidationError
from ...core.security import DEFAULT_BCRYPT_ROUNDS, hash_password, verify_password
from ...domain.models import IdentityContext, Role, User
from ...domain.ports.persistence import UserRepository
from .token_service import TokenService


class SessionService:
    """Registration, login and logout for user accounts."""

    def __init__(
        self,
        users: UserRepository,
        token_service: TokenService,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._users = users
        self._tokens = token_service
        self._bcrypt_rounds = bcrypt_rounds
        self._logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    def ensure_default_admin(self, email: Optional[str], password: Optional[str]) -> Optional[User]:
        if not email or not password:
            return None
        existing = self._users.get_user_by_email(email)
        if existing:
            return existing
        self._logger.info("Creating default administrator account for %s", email)
        return self._users.create_user(
            first_name="Admin",
            last_name="User",
            email=email,
            password_hash=hash_password(password, self._bcrypt_rounds),
            role=Role.ADMIN,
        )

    def register(self, first_name: str, last_name: str, email: str, password: str) -> User:
        email_clean = email.strip().lower()
        if not email_clean:
            raise ValidationError("Email is required")
        if not password:
            raise ValidationError("Password is required")
        if self._users.get_user_by_email(email_clean):
            raise UserAlreadyExists()
        user = self._users.create_user(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email_clean,
            password_hash=hash_password(password, self._bcrypt_rounds),
            last_connection=_utcnow(),
        )
        self._logger.info("New user registered: %s", user.email)
        return user

    def login(self, email: str, password: str) -> str:
        """Check credentials and return a signed session token."""
        user = self._users.get_user_by_email(email.strip().lower())
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        user = self._users.update_user(user.id, last_connection=_utcnow()) or user
        token = self._tokens.issue_for_user(user)
        self._logger.info("User logged in: %s", user.email)
        return token

    def logout(self, identity: IdentityContext) -> None:
        # Tokens stay valid until they expire; logout only records the time.
        self._users.update_user(identity.id, last_connection=_utcnow())
        self._logger.info("User logged out: %s", identity.email)

    def current(self, identity: IdentityContext) -> User:
        user = self._users.get_user_by_id(identity.id)
        if user is None:
            raise UserNotFound()
        return user


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
