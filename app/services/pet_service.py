"""Service for pet catalogue management."""

import logging
from typing import List, Optional

from app.core.errors import PetNotFound
from app.domain.models import Pet, PetSpecies
from app.domain.ports.persistence import PetRepository


class PetService:
    """Service for listing and administering pets."""

    def __init__(self, pet_repository: PetRepository, logger: Optional[logging.Logger] = None):
        self.pet_repository = pet_repository
        self.logger = logger or logging.getLogger(__name__)

    def list_pets(
        self,
        species: Optional[PetSpecies] = None,
        adopted: Optional[bool] = None,
    ) -> List[Pet]:
        """List pets, optionally filtered by species and availability."""
        return self.pet_repository.list_pets(species=species, adopted=adopted)

    def get_pet(self, pet_id: int) -> Pet:
        pet = self.pet_repository.get_pet(pet_id)
        if not pet:
            raise PetNotFound()
        return pet

    def create_pet(
        self,
        name: str,
        species: PetSpecies,
        breed: Optional[str] = None,
        age: Optional[int] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Pet:
        """
        Create a new pet, available for adoption.

        Args:
            name: Pet name
            species: One of the supported species
            breed: Breed name
            age: Age in years
            description: Free text description
            image: Image storage reference

        Returns:
            The created Pet
        """
        pet = self.pet_repository.create_pet(
            name=name.strip(),
            species=species,
            breed=breed,
            age=age,
            description=description,
            image=image,
        )
        self.logger.info("Pet %s (%s) created", pet.id, pet.name)
        return pet

    def update_pet(self, pet_id: int, **changes) -> Pet:
        """
        Update pet details.

        Adoption state is not editable here; it only changes through an adoption.
        """
        pet = self.pet_repository.update_pet(pet_id, **changes)
        if not pet:
            raise PetNotFound()
        return pet

    def delete_pet(self, pet_id: int) -> None:
        if not self.pet_repository.delete_pet(pet_id):
            raise PetNotFound()
        self.logger.info("Pet %s deleted", pet_id)
