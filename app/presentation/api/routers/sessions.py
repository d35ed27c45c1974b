from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ....application.services.session_service import SessionService
from ....core.dependencies import get_session_service
from ....domain.models import IdentityContext
from ...api.dependencies import require_identity
from ...api.schemas.session import LoginRequest, RegisterRequest
from ...api.serializers import serialize_user

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    session_service.register(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
    )
    return {"status": "success", "message": "User registered successfully"}


@router.post("/login")
def login(
    payload: LoginRequest,
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    token = session_service.login(payload.email, payload.password)
    return {"status": "success", "token": token}


@router.post("/logout")
async def logout(
    identity: IdentityContext = Depends(require_identity),
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    session_service.logout(identity)
    return {"status": "success", "message": "Logout successful"}


@router.get("/current")
async def current(
    identity: IdentityContext = Depends(require_identity),
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    user = session_service.current(identity)
    return {"status": "success", "payload": serialize_user(user)}
