from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt

from ...core.config import DEFAULT_JWT_SECRET
from ...core.errors import InvalidToken, TokenExpired
from ...domain.models import IdentityContext, Role, User

REQUIRED_CLAIMS = ("id", "email", "role")


class TokenService:
    """Issues and verifies signed, time-bound identity assertions."""

    def __init__(
        self,
        secret_key: Optional[str],
        token_exp_minutes: int = 60,
        algorithm: str = "HS256",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        if not secret_key:
            secret_key = DEFAULT_JWT_SECRET
        if secret_key == DEFAULT_JWT_SECRET:
            self._logger.warning(
                "JWT_SECRET is using the built-in default. Configure a secure secret in production."
            )
        self._secret_key = secret_key
        self._ttl = timedelta(minutes=token_exp_minutes)
        self._algorithm = algorithm

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, claims: Mapping[str, Any], ttl: Optional[timedelta] = None) -> str:
        """Sign ``claims`` with an ``iat`` of now and an ``exp`` of now + ``ttl``."""
        missing = [name for name in REQUIRED_CLAIMS if claims.get(name) is None]
        if missing:
            raise ValueError(f"Missing token claims: {', '.join(missing)}")
        now = datetime.now(tz=timezone.utc)
        payload = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + (self._ttl if ttl is None else ttl)
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def issue_for_user(self, user: User, ttl: Optional[timedelta] = None) -> str:
        return self.issue({"id": user.id, "email": user.email, "role": user.role.value}, ttl)

    def verify(self, token: str) -> Dict[str, Any]:
        """Decode ``token`` or raise ``TokenExpired`` / ``InvalidToken``."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken() from exc
        if any(payload.get(name) is None for name in REQUIRED_CLAIMS):
            raise InvalidToken()
        return payload

    def identity_from_token(self, token: str) -> IdentityContext:
        payload = self.verify(token)
        try:
            return IdentityContext(
                id=int(payload["id"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidToken() from exc
