"""Capability checks run in order before a request reaches a service.

Each guard is a plain function that either returns the identity it vouches
for or raises a typed failure from ``app.core.errors``.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional

from fastapi.security import HTTPAuthorizationCredentials

from ..core.errors import Forbidden, Unauthorized
from ..domain.models import IdentityContext, Role
from .services.token_service import TokenService

logger = logging.getLogger(__name__)


def extract_bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized()
    token = credentials.credentials.strip()
    if not token:
        raise Unauthorized()
    return token


def authenticate(
    credentials: Optional[HTTPAuthorizationCredentials],
    token_service: TokenService,
    audit_logger: Optional[logging.Logger] = None,
) -> IdentityContext:
    """Turn bearer credentials into a verified identity.

    ``InvalidToken`` and ``TokenExpired`` propagate unchanged so clients can
    tell a malformed credential from one that only needs a fresh login.
    """
    token = extract_bearer_token(credentials)
    identity = token_service.identity_from_token(token)
    (audit_logger or logger).info("User authenticated: %s", identity.email)
    return identity


def authorize(identity: Optional[IdentityContext], roles: AbstractSet[Role]) -> IdentityContext:
    if identity is None:
        raise Unauthorized("User not authenticated")
    if identity.role not in roles:
        raise Forbidden()
    return identity


def authorize_self_or_admin(identity: Optional[IdentityContext], user_id: int) -> IdentityContext:
    if identity is None:
        raise Unauthorized("User not authenticated")
    if identity.is_admin or identity.id == user_id:
        return identity
    raise Forbidden()


def capability_set(roles: Iterable[Role]) -> frozenset:
    return frozenset(Role(role) for role in roles)
