from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from ....core.dependencies import get_pet_service
from ....domain.models import IdentityContext, PetSpecies
from ....services.pet_service import PetService
from ...api.dependencies import require_admin
from ...api.schemas.pet import PetCreatePayload, PetUpdatePayload
from ...api.serializers import serialize_pet

router = APIRouter(prefix="/api/pets", tags=["Pets"])


@router.get("")
async def list_pets(
    species: Optional[PetSpecies] = Query(default=None),
    adopted: Optional[bool] = Query(default=None),
    service: PetService = Depends(get_pet_service),
) -> Dict[str, Any]:
    pets = service.list_pets(species=species, adopted=adopted)
    return {"status": "success", "payload": [serialize_pet(pet) for pet in pets]}


@router.get("/{pet_id}")
async def get_pet(
    pet_id: int,
    service: PetService = Depends(get_pet_service),
) -> Dict[str, Any]:
    return {"status": "success", "payload": serialize_pet(service.get_pet(pet_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pet(
    payload: PetCreatePayload,
    _: IdentityContext = Depends(require_admin),
    service: PetService = Depends(get_pet_service),
) -> Dict[str, Any]:
    pet = service.create_pet(
        name=payload.name,
        species=payload.species,
        breed=payload.breed,
        age=payload.age,
        description=payload.description,
        image=payload.image,
    )
    return {"status": "success", "payload": serialize_pet(pet)}


@router.put("/{pet_id}")
async def update_pet(
    pet_id: int,
    payload: PetUpdatePayload,
    _: IdentityContext = Depends(require_admin),
    service: PetService = Depends(get_pet_service),
) -> Dict[str, Any]:
    pet = service.update_pet(pet_id, **payload.model_dump(exclude_none=True))
    return {"status": "success", "payload": serialize_pet(pet)}


@router.delete("/{pet_id}")
async def delete_pet(
    pet_id: int,
    _: IdentityContext = Depends(require_admin),
    service: PetService = Depends(get_pet_service),
) -> Dict[str, Any]:
    service.delete_pet(pet_id)
    return {"status": "success", "message": "Pet deleted"}
