from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ....domain.models import PetSpecies
from ....domain.models.pet import MAX_PET_AGE, MIN_PET_AGE


class PetCreatePayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    species: PetSpecies
    breed: Optional[str] = Field(default=None, max_length=80)
    age: Optional[int] = Field(default=None, ge=MIN_PET_AGE, le=MAX_PET_AGE)
    description: Optional[str] = Field(default=None, max_length=2000)
    image: Optional[str] = Field(default=None, max_length=500)


class PetUpdatePayload(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    species: Optional[PetSpecies] = None
    breed: Optional[str] = Field(default=None, max_length=80)
    age: Optional[int] = Field(default=None, ge=MIN_PET_AGE, le=MAX_PET_AGE)
    description: Optional[str] = Field(default=None, max_length=2000)
    image: Optional[str] = Field(default=None, max_length=500)
