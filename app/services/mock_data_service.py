"""Service for generating and seeding mock users and pets."""

import logging
from typing import Any, Dict, List, Optional

from faker import Faker

from app.core.security import DEFAULT_BCRYPT_ROUNDS, hash_password
from app.domain.models import PetSpecies, Role
from app.domain.ports.persistence import PersistenceGateway

MOCK_PASSWORD = "coder123"

PET_BREEDS = {
    PetSpecies.DOG: ["Labrador", "German Shepherd", "Golden Retriever", "Bulldog", "Beagle"],
    PetSpecies.CAT: ["Persian", "Siamese", "Maine Coon", "Ragdoll", "Sphynx"],
    PetSpecies.BIRD: ["Parrot", "Canary", "Cockatiel", "Finch", "Budgie"],
    PetSpecies.RABBIT: ["Holland Lop", "Netherland Dwarf", "Rex", "Angora", "Lionhead"],
    PetSpecies.HAMSTER: ["Syrian", "Dwarf", "Roborovski", "Chinese", "Campbell"],
}


class MockDataService:
    """Service producing realistic fake records for demos and load tests."""

    def __init__(
        self,
        persistence: PersistenceGateway,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
        faker: Optional[Faker] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.persistence = persistence
        self.bcrypt_rounds = bcrypt_rounds
        self.faker = faker or Faker()
        self.logger = logger or logging.getLogger(__name__)

    def generate_pets(self, count: int = 100) -> List[Dict[str, Any]]:
        """
        Generate unsaved pets, all available for adoption.

        Args:
            count: Number of pets to generate

        Returns:
            List of pet dictionaries
        """
        pets = []
        for _ in range(count):
            species = self.faker.random_element(list(PetSpecies))
            pets.append(
                {
                    "name": self.faker.first_name(),
                    "species": species.value,
                    "breed": self.faker.random_element(PET_BREEDS[species]),
                    "age": self.faker.random_int(min=1, max=15),
                    "description": self.faker.paragraph(),
                    "image": self.faker.image_url(),
                    "adopted": False,
                    "owner": None,
                }
            )
        return pets

    def generate_users(self, count: int = 50) -> List[Dict[str, Any]]:
        """
        Generate unsaved users sharing the mock password.

        Args:
            count: Number of users to generate

        Returns:
            List of user dictionaries with a hashed ``password``
        """
        # One hash for the shared password.
        password_hash = hash_password(MOCK_PASSWORD, self.bcrypt_rounds)
        self.faker.unique.clear()
        users = []
        for _ in range(count):
            first_name = self.faker.first_name()
            last_name = self.faker.last_name()
            users.append(
                {
                    "first_name": first_name,
                    "last_name": last_name,
                    "email": self.faker.unique.email(),
                    "password": password_hash,
                    "role": self.faker.random_element([Role.USER, Role.ADMIN]).value,
                    "pets": [],
                }
            )
        return users

    def seed(self, users: int = 50, pets: int = 100) -> Dict[str, int]:
        """
        Generate mock records and insert them into the store.

        Users whose email is already registered are skipped.

        Returns:
            Counts of inserted users and pets
        """
        inserted_users = 0
        for item in self.generate_users(users):
            if self.persistence.get_user_by_email(item["email"]):
                continue
            self.persistence.create_user(
                first_name=item["first_name"],
                last_name=item["last_name"],
                email=item["email"],
                password_hash=item["password"],
                role=Role(item["role"]),
            )
            inserted_users += 1

        for item in self.generate_pets(pets):
            self.persistence.create_pet(
                name=item["name"],
                species=PetSpecies(item["species"]),
                breed=item["breed"],
                age=item["age"],
                description=item["description"],
                image=item["image"],
            )

        self.logger.info("Generated %s users and %s pets", inserted_users, pets)
        return {"users": inserted_users, "pets": pets}
