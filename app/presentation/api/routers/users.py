"""API router for user management."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.core.dependencies import get_user_service
from app.domain.models import IdentityContext, UserDocument
from app.presentation.api.dependencies import require_admin, require_identity
from app.presentation.api.schemas.user import DocumentsUploadRequest, UserUpdateRequest
from app.presentation.api.serializers import serialize_user
from app.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("")
async def list_users(
    _: IdentityContext = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """List all users."""
    users = user_service.list_users()
    return {"status": "success", "payload": [serialize_user(user) for user in users]}


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    identity: IdentityContext = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Get a single user (self or admin)."""
    user = user_service.get_user(user_id, identity)
    return {"status": "success", "payload": serialize_user(user)}


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    request: UserUpdateRequest,
    identity: IdentityContext = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Update profile fields (self or admin; role changes are admin only)."""
    user = user_service.update_user(
        user_id,
        identity,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        role=request.role,
    )
    return {"status": "success", "message": "User updated", "payload": serialize_user(user)}


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    _: IdentityContext = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Delete a user."""
    user_service.delete_user(user_id)
    return {"status": "success", "message": "User deleted"}


@router.post("/{user_id}/documents")
async def upload_documents(
    user_id: int,
    request: DocumentsUploadRequest,
    identity: IdentityContext = Depends(require_identity),
    user_service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Record references to documents stored elsewhere."""
    documents = [UserDocument(name=item.name, reference=item.reference) for item in request.documents]
    user_service.add_documents(user_id, identity, documents)
    return {
        "status": "success",
        "message": "Documents uploaded successfully",
        "payload": [{"name": item.name, "reference": item.reference} for item in documents],
    }
