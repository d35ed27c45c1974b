from __future__ import annotations

import logging
from typing import List, Optional

from ...core.errors import (
    AdoptionNotFound,
    Conflict,
    Forbidden,
    InvalidStatusTransition,
    PetAlreadyAdopted,
    PetNotFound,
    UserNotFound,
)
from ...domain.models import Adoption, AdoptionStatus, IdentityContext, User
from ...domain.ports.persistence import PersistenceGateway


class AdoptionService:
    """Coordinates the pet, user and adoption writes behind "adopt a pet".

    Ownership moves as soon as the adoption is created; the adoption
    ``status`` is the review trail an administrator settles afterwards.
    """

    def __init__(
        self,
        persistence: PersistenceGateway,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._persistence = persistence
        self._logger = logger or logging.getLogger(__name__)

    # Queries --------------------------------------------------------------
    def list_visible(self, identity: IdentityContext) -> List[Adoption]:
        if identity.is_admin:
            result = self._persistence.list_adoptions()
        else:
            result = self._persistence.list_adoptions(owner_id=identity.id)
        return list(result or [])

    def get_adoption(self, adoption_id: int) -> Adoption:
        adoption = self._persistence.get_adoption(adoption_id)
        if adoption is None:
            raise AdoptionNotFound()
        return adoption

    # Commands -------------------------------------------------------------
    def create_adoption(self, user_id: int, pet_id: int) -> Adoption:
        pet = self._persistence.get_pet(pet_id)
        if pet is None:
            raise PetNotFound()
        user = self._persistence.get_user_by_id(user_id)
        if user is None:
            raise UserNotFound()
        if pet.adopted:
            raise PetAlreadyAdopted()

        # The claim is the only write that decides who wins a concurrent race.
        if not self._persistence.claim_pet(pet.id, user.id):
            self._logger.info("Pet %s was claimed by another adoption first", pet.id)
            raise PetAlreadyAdopted()

        adoption = self._complete_adoption(user, pet.id)
        self._logger.info("Pet %s adopted by user %s (adoption %s)", pet.id, user.id, adoption.id)
        return adoption

    def reconcile_adoption(self, pet_id: int) -> Adoption:
        """Finish the user and adoption writes for a pet that is already claimed.

        Safe to repeat: nothing is written twice.
        """
        pet = self._persistence.get_pet(pet_id)
        if pet is None:
            raise PetNotFound()
        if not pet.adopted or pet.owner is None:
            raise Conflict("Pet has not been adopted", code="PET_NOT_ADOPTED")
        user = self._persistence.get_user_by_id(pet.owner)
        if user is None:
            raise UserNotFound()
        return self._complete_adoption(user, pet.id)

    def update_status(
        self,
        adoption_id: int,
        status: AdoptionStatus,
        identity: IdentityContext,
    ) -> Adoption:
        if not identity.is_admin:
            raise Forbidden()
        adoption = self.get_adoption(adoption_id)
        new_status = AdoptionStatus(status)
        if not adoption.can_transition_to(new_status):
            raise InvalidStatusTransition(
                f"Adoption cannot move from {adoption.status.value} to {new_status.value}"
            )
        # Conditional on the status just read; a concurrent update makes this miss.
        updated = self._persistence.update_adoption_status(
            adoption.id, new_status, expected=adoption.status
        )
        if updated is None:
            current = self._persistence.get_adoption(adoption.id)
            if current is None:
                raise AdoptionNotFound()
            raise InvalidStatusTransition(
                f"Adoption cannot move from {current.status.value} to {new_status.value}"
            )
        self._logger.info(
            "Adoption %s moved to %s by %s", adoption.id, new_status.value, identity.email
        )
        return updated

    # Helpers --------------------------------------------------------------
    def _complete_adoption(self, user: User, pet_id: int) -> Adoption:
        try:
            if pet_id not in user.pets:
                self._persistence.append_user_pet(user.id, pet_id)
            adoption = self._persistence.find_adoption(user.id, pet_id)
            if adoption is None:
                adoption = self._persistence.create_adoption(user.id, pet_id)
        except Exception:
            self._logger.error(
                "Pet %s is claimed by user %s but the adoption was not completed; "
                "run reconciliation for this pet",
                pet_id,
                user.id,
                exc_info=True,
            )
            raise
        return adoption
