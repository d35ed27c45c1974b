from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging, shutdown_logging
from ..application.services.adoption_service import AdoptionService
from ..application.services.session_service import SessionService
from ..application.services.token_service import TokenService
from ..infrastructure.persistence.sqlite import SQLitePersistence
from ..presentation.api.error_handlers import register_error_handlers
from ..presentation.api.routers import adoptions as adoptions_router
from ..presentation.api.routers import mocks as mocks_router
from ..presentation.api.routers import pets as pets_router
from ..presentation.api.routers import sessions as sessions_router
from ..presentation.api.routers import users as users_router
from ..services.mock_data_service import MockDataService
from ..services.pet_service import PetService
from ..services.user_service import UserService

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Pet Adoption Records", lifespan=_create_lifespan(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_error_handlers(app)

    app.include_router(sessions_router.router)
    app.include_router(users_router.router)
    app.include_router(pets_router.router)
    app.include_router(adoptions_router.router)
    app.include_router(mocks_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        persistence = SQLitePersistence(settings.database_path)
        token_service = TokenService(
            secret_key=settings.jwt_secret,
            token_exp_minutes=settings.jwt_expiration_minutes,
            algorithm=settings.jwt_algorithm,
            logger=logging.getLogger("app.security"),
        )
        session_service = SessionService(
            persistence,
            token_service,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
        session_service.ensure_default_admin(
            settings.admin_default_email, settings.admin_default_password
        )

        container = ApplicationContainer(
            settings=settings,
            persistence=persistence,
            audit_logger=logging.getLogger("app.audit"),
            token_service=token_service,
            session_service=session_service,
            adoption_service=AdoptionService(persistence),
            user_service=UserService(persistence),
            pet_service=PetService(persistence),
            mock_data_service=MockDataService(persistence, bcrypt_rounds=settings.bcrypt_rounds),
        )

        app.state.container = container  # type: ignore[attr-defined]

        try:
            yield
        finally:
            persistence.close()
            shutdown_logging()

    return lifespan
