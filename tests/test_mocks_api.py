"""Mock data endpoints."""

from app.domain.models import PetSpecies


def test_mocking_pets(client):
    res = client.get("/api/mocks/mockingpets")

    assert res.status_code == 200
    pets = res.json()["payload"]
    assert len(pets) == 100
    assert {pet["species"] for pet in pets} <= {species.value for species in PetSpecies}
    assert all(pet["adopted"] is False and pet["owner"] is None for pet in pets)


def test_mocking_users_hashes_passwords(client):
    res = client.get("/api/mocks/mockingusers")

    users = res.json()["payload"]
    assert len(users) == 50
    assert all(user["password"] != "coder123" for user in users)
    assert {user["role"] for user in users} <= {"user", "admin"}


def test_generate_data_inserts_records(client, store, admin_headers):
    res = client.post("/api/mocks/generateData", json={"users": 3, "pets": 4}, headers=admin_headers)

    assert res.status_code == 200
    assert res.json()["payload"] == {"users": 3, "pets": 4}
    assert len(store.list_pets()) == 4
    # The admin used for the request plus the generated users.
    assert len(store.list_users()) == 4


def test_generate_data_is_admin_only(client, user_headers):
    res = client.post("/api/mocks/generateData", json={"users": 1, "pets": 1}, headers=user_headers)

    assert res.status_code == 403
