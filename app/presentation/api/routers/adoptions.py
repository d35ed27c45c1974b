from typing import Any, Dict

from fastapi import APIRouter, Depends

from ....application.services.adoption_service import AdoptionService
from ....core.dependencies import get_adoption_service
from ....domain.models import IdentityContext
from ...api.dependencies import require_admin, require_identity
from ...api.schemas.adoption import AdoptionStatusPayload
from ...api.serializers import serialize_adoption

router = APIRouter(prefix="/api/adoptions", tags=["Adoptions"])


@router.get("")
async def list_adoptions(
    identity: IdentityContext = Depends(require_identity),
    service: AdoptionService = Depends(get_adoption_service),
) -> Dict[str, Any]:
    adoptions = service.list_visible(identity)
    return {"status": "success", "payload": [serialize_adoption(item) for item in adoptions]}


@router.get("/{adoption_id}")
async def get_adoption(
    adoption_id: int,
    _: IdentityContext = Depends(require_identity),
    service: AdoptionService = Depends(get_adoption_service),
) -> Dict[str, Any]:
    adoption = service.get_adoption(adoption_id)
    return {"status": "success", "payload": serialize_adoption(adoption)}


@router.post("/pets/{pet_id}/reconcile")
async def reconcile_adoption(
    pet_id: int,
    _: IdentityContext = Depends(require_admin),
    service: AdoptionService = Depends(get_adoption_service),
) -> Dict[str, Any]:
    adoption = service.reconcile_adoption(pet_id)
    return {"status": "success", "payload": serialize_adoption(adoption)}


@router.post("/{user_id}/{pet_id}")
async def create_adoption(
    user_id: int,
    pet_id: int,
    _: IdentityContext = Depends(require_identity),
    service: AdoptionService = Depends(get_adoption_service),
) -> Dict[str, Any]:
    service.create_adoption(user_id, pet_id)
    return {"status": "success", "message": "Pet adopted"}


@router.put("/{adoption_id}")
async def update_adoption_status(
    adoption_id: int,
    payload: AdoptionStatusPayload,
    identity: IdentityContext = Depends(require_admin),
    service: AdoptionService = Depends(get_adoption_service),
) -> Dict[str, Any]:
    adoption = service.update_status(adoption_id, payload.status, identity)
    return {
        "status": "success",
        "message": "Adoption status updated",
        "payload": serialize_adoption(adoption),
    }
