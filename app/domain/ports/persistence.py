from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from ..models import Adoption, AdoptionStatus, Pet, PetSpecies, Role, User, UserDocument


class UserRepository(Protocol):
    """Persistence functions related to user accounts."""

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def list_users(self) -> List[User]:
        ...

    def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
        last_connection: Optional[datetime] = None,
    ) -> User:
        ...

    def update_user(
        self,
        user_id: int,
        *,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[Role] = None,
        last_connection: Optional[datetime] = None,
    ) -> Optional[User]:
        ...

    def append_user_pet(self, user_id: int, pet_id: int) -> Optional[User]:
        ...

    def add_user_documents(self, user_id: int, documents: Sequence[UserDocument]) -> Optional[User]:
        ...

    def delete_user(self, user_id: int) -> bool:
        ...


class PetRepository(Protocol):
    """Persistence functions related to pets and their availability."""

    def get_pet(self, pet_id: int) -> Optional[Pet]:
        ...

    def list_pets(
        self,
        species: Optional[PetSpecies] = None,
        adopted: Optional[bool] = None,
    ) -> List[Pet]:
        ...

    def create_pet(
        self,
        name: str,
        species: PetSpecies,
        breed: Optional[str] = None,
        age: Optional[int] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Pet:
        ...

    def update_pet(
        self,
        pet_id: int,
        *,
        name: Optional[str] = None,
        species: Optional[PetSpecies] = None,
        breed: Optional[str] = None,
        age: Optional[int] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Optional[Pet]:
        ...

    def claim_pet(self, pet_id: int, owner_id: int) -> bool:
        """Mark an available pet as adopted by ``owner_id``.

        Compare-and-swap on the ``adopted`` flag: returns ``False`` without
        writing anything when the pet is already adopted or missing.
        """
        ...

    def delete_pet(self, pet_id: int) -> bool:
        ...


class AdoptionRepository(Protocol):
    """Persistence functions related to adoption records."""

    def get_adoption(self, adoption_id: int) -> Optional[Adoption]:
        ...

    def list_adoptions(self, owner_id: Optional[int] = None) -> List[Adoption]:
        ...

    def find_adoption(self, owner_id: int, pet_id: int) -> Optional[Adoption]:
        ...

    def create_adoption(
        self,
        owner_id: int,
        pet_id: int,
        status: AdoptionStatus = AdoptionStatus.PENDING,
    ) -> Adoption:
        ...

    def update_adoption_status(
        self,
        adoption_id: int,
        status: AdoptionStatus,
        expected: AdoptionStatus = AdoptionStatus.PENDING,
    ) -> Optional[Adoption]:
        ...


class PersistenceGateway(
    UserRepository,
    PetRepository,
    AdoptionRepository,
    Protocol,
):
    """Composite gateway combining every persistence concern used by the app."""

    def close(self) -> None:
        ...
