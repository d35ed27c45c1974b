"""Adoptions API: role scoping, adopt flow and admin status changes."""

import pytest

from app.domain.models import AdoptionStatus


@pytest.fixture
def pet(make_pet):
    return make_pet()


def test_adopt_then_adopt_again(client, store, regular_user, user_headers, pet):
    first = client.post(f"/api/adoptions/{regular_user.id}/{pet.id}", headers=user_headers)
    assert first.status_code == 200
    assert first.json() == {"status": "success", "message": "Pet adopted"}

    second = client.post(f"/api/adoptions/{regular_user.id}/{pet.id}", headers=user_headers)
    assert second.status_code == 400
    assert second.json()["status"] == "error"
    assert second.json()["error"] == "Pet is already adopted"

    stored = store.get_pet(pet.id)
    assert stored.adopted is True and stored.owner == regular_user.id
    assert len(store.list_adoptions()) == 1


def test_adopt_requires_authentication(client, regular_user, pet):
    res = client.post(f"/api/adoptions/{regular_user.id}/{pet.id}")

    assert res.status_code == 401


def test_adopt_missing_user(client, user_headers, pet):
    res = client.post(f"/api/adoptions/9999/{pet.id}", headers=user_headers)

    assert res.status_code == 404
    assert res.json()["error"] == "User not found"


def test_adopt_missing_pet(client, regular_user, user_headers):
    res = client.post(f"/api/adoptions/{regular_user.id}/9999", headers=user_headers)

    assert res.status_code == 404
    assert res.json()["error"] == "Pet not found"


def test_list_is_scoped_for_regular_user(client, make_user, make_pet, regular_user, user_headers):
    other = make_user(email="other@petshelter.org")
    client.post(f"/api/adoptions/{regular_user.id}/{make_pet().id}", headers=user_headers)
    client.post(f"/api/adoptions/{other.id}/{make_pet().id}", headers=user_headers)

    res = client.get("/api/adoptions", headers=user_headers)

    assert res.status_code == 200
    payload = res.json()["payload"]
    assert len(payload) == 1
    assert all(item["owner"] == regular_user.id for item in payload)


def test_list_for_admin_returns_everything(client, make_user, make_pet, admin_headers, regular_user, user_headers):
    other = make_user(email="other@petshelter.org")
    client.post(f"/api/adoptions/{regular_user.id}/{make_pet().id}", headers=user_headers)
    client.post(f"/api/adoptions/{other.id}/{make_pet().id}", headers=user_headers)

    res = client.get("/api/adoptions", headers=admin_headers)

    assert res.status_code == 200
    assert len(res.json()["payload"]) == 2


def test_list_empty_is_array(client, user_headers):
    res = client.get("/api/adoptions", headers=user_headers)

    assert res.json() == {"status": "success", "payload": []}


def test_list_requires_authentication(client):
    assert client.get("/api/adoptions").status_code == 401


def test_get_adoption(client, store, regular_user, user_headers, pet):
    adoption = store.create_adoption(regular_user.id, pet.id)

    res = client.get(f"/api/adoptions/{adoption.id}", headers=user_headers)

    assert res.status_code == 200
    assert res.json()["payload"]["pet"] == pet.id
    assert res.json()["payload"]["status"] == "pending"


def test_get_missing_adoption(client, user_headers):
    res = client.get("/api/adoptions/9999", headers=user_headers)

    assert res.status_code == 404
    assert res.json()["error"] == "Adoption not found"


def test_admin_updates_status(client, store, regular_user, admin_headers, pet):
    adoption = store.create_adoption(regular_user.id, pet.id)

    res = client.put(f"/api/adoptions/{adoption.id}", json={"status": "approved"}, headers=admin_headers)

    assert res.status_code == 200
    assert res.json()["message"] == "Adoption status updated"
    assert store.get_adoption(adoption.id).status is AdoptionStatus.APPROVED


def test_regular_user_cannot_update_status(client, store, regular_user, user_headers, pet):
    adoption = store.create_adoption(regular_user.id, pet.id)

    res = client.put(f"/api/adoptions/{adoption.id}", json={"status": "approved"}, headers=user_headers)

    assert res.status_code == 403
    assert res.json()["error"] == "Not authorized"
    assert store.get_adoption(adoption.id).status is AdoptionStatus.PENDING


def test_update_missing_adoption(client, admin_headers):
    res = client.put("/api/adoptions/9999", json={"status": "approved"}, headers=admin_headers)

    assert res.status_code == 404
    assert res.json()["error"] == "Adoption not found"


def test_update_settled_adoption_conflicts(client, store, regular_user, admin_headers, pet):
    adoption = store.create_adoption(regular_user.id, pet.id)
    store.update_adoption_status(adoption.id, AdoptionStatus.REJECTED)

    res = client.put(f"/api/adoptions/{adoption.id}", json={"status": "approved"}, headers=admin_headers)

    assert res.status_code == 409
    assert res.json()["code"] == "INVALID_STATUS_TRANSITION"


def test_update_with_unknown_status(client, store, regular_user, admin_headers, pet):
    adoption = store.create_adoption(regular_user.id, pet.id)

    res = client.put(f"/api/adoptions/{adoption.id}", json={"status": "maybe"}, headers=admin_headers)

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_admin_reconciles_claimed_pet(client, store, regular_user, admin_headers, pet):
    store.claim_pet(pet.id, regular_user.id)

    res = client.post(f"/api/adoptions/pets/{pet.id}/reconcile", headers=admin_headers)

    assert res.status_code == 200
    assert res.json()["payload"]["owner"] == regular_user.id
    assert store.get_user_by_id(regular_user.id).pets == [pet.id]


def test_reconcile_is_admin_only(client, user_headers, pet):
    res = client.post(f"/api/adoptions/pets/{pet.id}/reconcile", headers=user_headers)

    assert res.status_code == 403
