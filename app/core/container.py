import logging
from dataclasses import dataclass

from ..application.services.adoption_service import AdoptionService
from ..application.services.session_service import SessionService
from ..application.services.token_service import TokenService
from .config import Settings
from ..domain.ports.persistence import PersistenceGateway
from ..services.mock_data_service import MockDataService
from ..services.pet_service import PetService
from ..services.user_service import UserService


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    persistence: PersistenceGateway
    audit_logger: logging.Logger
    token_service: TokenService
    session_service: SessionService
    adoption_service: AdoptionService
    user_service: UserService
    pet_service: PetService
    mock_data_service: MockDataService
