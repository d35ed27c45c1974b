"""Domain models for the pet adoption service."""

from .adoption import Adoption, AdoptionStatus
from .identity import IdentityContext
from .pet import Pet, PetSpecies
from .user import Role, User, UserDocument

__all__ = [
    "Adoption",
    "AdoptionStatus",
    "IdentityContext",
    "Pet",
    "PetSpecies",
    "Role",
    "User",
    "UserDocument",
]
