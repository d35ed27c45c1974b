"""Root conftest: shared fixtures for the pet adoption service tests."""

from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from app.application.services.token_service import TokenService
from app.core.app_factory import create_application
from app.core.config import Settings
from app.core.security import hash_password
from app.domain.models import Pet, PetSpecies, Role, User
from app.infrastructure.persistence.sqlite import SQLitePersistence

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "app.db"))
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("BCRYPT_ROUNDS", str(TEST_BCRYPT_ROUNDS))
    monkeypatch.delenv("ADMIN_EMAIL", raising=False)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    return Settings()


@pytest.fixture
def client(settings):
    """Test client with the application lifespan running."""
    app = create_application(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store(client) -> SQLitePersistence:
    """The store behind the running application."""
    return client.app.state.container.persistence


@pytest.fixture
def persistence(tmp_path):
    """A standalone store for service-level tests."""
    gateway = SQLitePersistence(tmp_path / "store.db")
    yield gateway
    gateway.close()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_key=TEST_SECRET, token_exp_minutes=60)


def _make_user(gateway: SQLitePersistence) -> Callable[..., User]:
    def factory(
        email: str = "user@petshelter.org",
        password: str = "user123",
        role: Role = Role.USER,
        first_name: str = "Regular",
        last_name: str = "User",
    ) -> User:
        return gateway.create_user(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password, TEST_BCRYPT_ROUNDS),
            role=role,
        )

    return factory


def _make_pet(gateway: SQLitePersistence) -> Callable[..., Pet]:
    def factory(name: str = "Test Pet", species: PetSpecies = PetSpecies.DOG, **extra) -> Pet:
        extra.setdefault("breed", "Labrador")
        extra.setdefault("age", 2)
        return gateway.create_pet(name=name, species=species, **extra)

    return factory


@pytest.fixture
def make_user(store) -> Callable[..., User]:
    return _make_user(store)


@pytest.fixture
def make_pet(store) -> Callable[..., Pet]:
    return _make_pet(store)


@pytest.fixture
def make_store_user(persistence) -> Callable[..., User]:
    return _make_user(persistence)


@pytest.fixture
def make_store_pet(persistence) -> Callable[..., Pet]:
    return _make_pet(persistence)


@pytest.fixture
def login(client) -> Callable[[str, str], Dict[str, str]]:
    """Log in through the API and return ready-to-use auth headers."""

    def do_login(email: str, password: str) -> Dict[str, str]:
        res = client.post("/api/sessions/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['token']}"}

    return do_login


@pytest.fixture
def admin_headers(make_user, login) -> Dict[str, str]:
    make_user(email="admin@petshelter.org", password="admin123", role=Role.ADMIN, first_name="Admin")
    return login("admin@petshelter.org", "admin123")


@pytest.fixture
def regular_user(make_user) -> User:
    return make_user()


@pytest.fixture
def user_headers(regular_user, login) -> Dict[str, str]:
    return login(regular_user.email, "user123")
