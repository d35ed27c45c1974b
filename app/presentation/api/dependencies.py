import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...application.guards import authenticate, authorize, capability_set
from ...application.services.token_service import TokenService
from ...core.dependencies import get_audit_logger, get_token_service
from ...domain.models import IdentityContext, Role

_bearer_scheme = HTTPBearer(auto_error=False)


def require_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
    audit_logger: logging.Logger = Depends(get_audit_logger),
) -> IdentityContext:
    identity = authenticate(credentials, token_service, audit_logger)
    request.state.identity = identity
    return identity


def require_roles(*roles: Role):
    """Build a dependency that admits only identities holding one of ``roles``."""
    allowed = capability_set(roles)

    def dependency(request: Request, _: IdentityContext = Depends(require_identity)) -> IdentityContext:
        return authorize(getattr(request.state, "identity", None), allowed)

    return dependency


require_admin = require_roles(Role.ADMIN)
