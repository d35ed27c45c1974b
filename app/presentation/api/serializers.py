from datetime import datetime
from typing import Any, Dict, Optional

from ...domain.models import Adoption, Pet, User


def serialize_user(user: User) -> Dict[str, Any]:
    """Public view of a user; the password hash never leaves the service."""
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "role": user.role.value,
        "pets": list(user.pets),
        "documents": [{"name": item.name, "reference": item.reference} for item in user.documents],
        "last_connection": _isoformat(user.last_connection),
        "created_at": _isoformat(user.created_at),
        "updated_at": _isoformat(user.updated_at),
    }


def serialize_pet(pet: Pet) -> Dict[str, Any]:
    return {
        "id": pet.id,
        "name": pet.name,
        "species": pet.species.value,
        "breed": pet.breed,
        "age": pet.age,
        "description": pet.description,
        "image": pet.image,
        "adopted": pet.adopted,
        "owner": pet.owner,
        "created_at": _isoformat(pet.created_at),
        "updated_at": _isoformat(pet.updated_at),
    }


def serialize_adoption(adoption: Adoption) -> Dict[str, Any]:
    return {
        "id": adoption.id,
        "owner": adoption.owner,
        "pet": adoption.pet,
        "status": adoption.status.value,
        "created_at": _isoformat(adoption.created_at),
        "updated_at": _isoformat(adoption.updated_at),
    }


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.replace(microsecond=0).isoformat() if value else None
