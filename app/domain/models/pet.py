from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class PetSpecies(str, Enum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    HAMSTER = "hamster"


MIN_PET_AGE = 0
MAX_PET_AGE = 30


@dataclass(slots=True)
class Pet:
    id: int
    name: str
    species: PetSpecies
    breed: Optional[str]
    age: Optional[int]
    description: Optional[str]
    image: Optional[str]
    adopted: bool
    owner: Optional[int]
    created_at: datetime
    updated_at: datetime

    @property
    def is_available(self) -> bool:
        return not self.adopted
