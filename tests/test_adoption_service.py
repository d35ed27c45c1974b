"""Adoption workflow: the pet, user and adoption writes behind "adopt a pet".

Invariants:
    - For every pet, adopted is True iff owner is set
    - Adopting an adopted pet fails with PetAlreadyAdopted and writes nothing
    - Only pending adoptions can move, and only to approved or rejected
    - Non-admin callers only ever see their own adoptions
"""

import threading

import pytest

from app.application.services.adoption_service import AdoptionService
from app.core.errors import (
    AdoptionNotFound,
    Conflict,
    Forbidden,
    InvalidStatusTransition,
    PetAlreadyAdopted,
    PetNotFound,
    UserNotFound,
)
from app.domain.models import AdoptionStatus, IdentityContext, Role
from app.infrastructure.persistence.sqlite import SQLitePersistence


def assert_pet_invariant(gateway):
    for pet in gateway.list_pets():
        assert pet.adopted == (pet.owner is not None), pet


def identity_for(user):
    return IdentityContext(id=user.id, email=user.email, role=user.role)


@pytest.fixture
def service(persistence):
    return AdoptionService(persistence)


def test_create_adoption_moves_pet_to_user(service, persistence, make_store_user, make_store_pet):
    user = make_store_user()
    pet = make_store_pet()

    adoption = service.create_adoption(user.id, pet.id)

    stored_pet = persistence.get_pet(pet.id)
    assert stored_pet.adopted is True
    assert stored_pet.owner == user.id
    assert persistence.get_user_by_id(user.id).pets == [pet.id]
    assert adoption.owner == user.id
    assert adoption.pet == pet.id
    assert adoption.status is AdoptionStatus.PENDING
    assert_pet_invariant(persistence)


def test_adopting_adopted_pet_fails_without_writes(service, persistence, make_store_user, make_store_pet):
    first = make_store_user(email="first@petshelter.org")
    second = make_store_user(email="second@petshelter.org")
    pet = make_store_pet()
    service.create_adoption(first.id, pet.id)

    with pytest.raises(PetAlreadyAdopted):
        service.create_adoption(second.id, pet.id)

    assert persistence.get_pet(pet.id).owner == first.id
    assert persistence.get_user_by_id(second.id).pets == []
    assert len(persistence.list_adoptions()) == 1
    assert_pet_invariant(persistence)


def test_same_user_cannot_adopt_twice(service, persistence, make_store_user, make_store_pet):
    user = make_store_user()
    pet = make_store_pet()
    service.create_adoption(user.id, pet.id)

    with pytest.raises(PetAlreadyAdopted):
        service.create_adoption(user.id, pet.id)

    assert persistence.get_user_by_id(user.id).pets == [pet.id]


def test_missing_pet_is_reported_before_missing_user(service):
    with pytest.raises(PetNotFound):
        service.create_adoption(999, 999)


def test_missing_user(service, make_store_pet, persistence):
    pet = make_store_pet()

    with pytest.raises(UserNotFound):
        service.create_adoption(999, pet.id)

    assert persistence.get_pet(pet.id).adopted is False


def test_lost_claim_is_reported_as_already_adopted(tmp_path, make_store_user, make_store_pet, persistence):
    """A stale availability read still loses to the conditional claim."""
    user = make_store_user(email="late@petshelter.org")
    winner = make_store_user(email="winner@petshelter.org")
    pet = make_store_pet()
    stale_pet = persistence.get_pet(pet.id)
    persistence.claim_pet(pet.id, winner.id)

    class StaleReadStore(SQLitePersistence):
        def get_pet(self, pet_id):
            return stale_pet

    stale_store = StaleReadStore(tmp_path / "store.db")
    try:
        with pytest.raises(PetAlreadyAdopted):
            AdoptionService(stale_store).create_adoption(user.id, pet.id)
    finally:
        stale_store.close()

    assert persistence.get_pet(pet.id).owner == winner.id
    assert persistence.list_adoptions() == []


def test_concurrent_adoptions_have_one_winner(service, persistence, make_store_user, make_store_pet):
    users = [make_store_user(email=f"racer{index}@petshelter.org") for index in range(6)]
    pet = make_store_pet()
    barrier = threading.Barrier(len(users))
    outcomes = []

    def adopt(user_id):
        barrier.wait()
        try:
            service.create_adoption(user_id, pet.id)
            outcomes.append("won")
        except PetAlreadyAdopted:
            outcomes.append("lost")

    threads = [threading.Thread(target=adopt, args=(user.id,)) for user in users]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("won") == 1
    assert outcomes.count("lost") == len(users) - 1
    adoptions = persistence.list_adoptions()
    assert len(adoptions) == 1
    assert persistence.get_pet(pet.id).owner == adoptions[0].owner
    assert_pet_invariant(persistence)


def test_failed_adoption_record_can_be_reconciled(tmp_path, persistence, make_store_user, make_store_pet):
    user = make_store_user()
    pet = make_store_pet()

    class FailingAdoptionStore(SQLitePersistence):
        def create_adoption(self, owner_id, pet_id, status=AdoptionStatus.PENDING):
            raise RuntimeError("store unavailable")

    failing = FailingAdoptionStore(tmp_path / "store.db")
    try:
        with pytest.raises(RuntimeError):
            AdoptionService(failing).create_adoption(user.id, pet.id)
    finally:
        failing.close()

    assert persistence.get_pet(pet.id).adopted is True
    assert persistence.list_adoptions() == []
    assert_pet_invariant(persistence)

    service = AdoptionService(persistence)
    adoption = service.reconcile_adoption(pet.id)
    again = service.reconcile_adoption(pet.id)

    assert adoption.id == again.id
    assert len(persistence.list_adoptions()) == 1
    assert persistence.get_user_by_id(user.id).pets == [pet.id]


def test_reconcile_rejects_available_pet(service, make_store_pet):
    pet = make_store_pet()

    with pytest.raises(Conflict):
        service.reconcile_adoption(pet.id)


def test_list_visible_scopes_by_role(service, make_store_user, make_store_pet):
    alice = make_store_user(email="alice@petshelter.org")
    bob = make_store_user(email="bob@petshelter.org")
    admin = make_store_user(email="admin@petshelter.org", role=Role.ADMIN)
    for owner in (alice, bob, alice):
        service.create_adoption(owner.id, make_store_pet().id)

    alice_view = service.list_visible(identity_for(alice))
    bob_view = service.list_visible(identity_for(bob))
    admin_view = service.list_visible(identity_for(admin))

    assert len(alice_view) == 2
    assert all(adoption.owner == alice.id for adoption in alice_view)
    assert [adoption.owner for adoption in bob_view] == [bob.id]
    assert len(admin_view) == 3


def test_list_visible_is_empty_list_without_adoptions(service, make_store_user):
    assert service.list_visible(identity_for(make_store_user())) == []


def test_get_missing_adoption(service):
    with pytest.raises(AdoptionNotFound):
        service.get_adoption(42)


@pytest.fixture
def pending_adoption(service, make_store_user, make_store_pet):
    return service.create_adoption(make_store_user().id, make_store_pet().id)


@pytest.fixture
def admin_identity(make_store_user):
    return identity_for(make_store_user(email="admin@petshelter.org", role=Role.ADMIN))


@pytest.mark.parametrize("status", [AdoptionStatus.APPROVED, AdoptionStatus.REJECTED])
def test_admin_settles_pending_adoption(service, pending_adoption, admin_identity, status):
    updated = service.update_status(pending_adoption.id, status, admin_identity)

    assert updated.status is status
    assert service.get_adoption(pending_adoption.id).status is status


def test_settled_adoption_is_terminal(service, pending_adoption, admin_identity):
    service.update_status(pending_adoption.id, AdoptionStatus.APPROVED, admin_identity)

    for status in AdoptionStatus:
        with pytest.raises(InvalidStatusTransition):
            service.update_status(pending_adoption.id, status, admin_identity)


def test_pending_cannot_be_set_again(service, pending_adoption, admin_identity):
    with pytest.raises(InvalidStatusTransition):
        service.update_status(pending_adoption.id, AdoptionStatus.PENDING, admin_identity)


def test_non_admin_cannot_update_status(service, persistence, pending_adoption):
    owner = persistence.get_user_by_id(pending_adoption.owner)

    with pytest.raises(Forbidden):
        service.update_status(pending_adoption.id, AdoptionStatus.APPROVED, identity_for(owner))

    assert service.get_adoption(pending_adoption.id).status is AdoptionStatus.PENDING


def test_update_missing_adoption(service, admin_identity):
    with pytest.raises(AdoptionNotFound):
        service.update_status(123, AdoptionStatus.APPROVED, admin_identity)


def test_concurrent_status_updates_settle_once(tmp_path, persistence, make_store_user, make_store_pet):
    """Both admins read the pending adoption before either writes."""
    pending = AdoptionService(persistence).create_adoption(make_store_user().id, make_store_pet().id)
    admin = identity_for(make_store_user(email="admin@petshelter.org", role=Role.ADMIN))
    barrier = threading.Barrier(2)
    both_read = threading.Event()

    class SlowReadStore(SQLitePersistence):
        def get_adoption(self, adoption_id):
            adoption = super().get_adoption(adoption_id)
            if not both_read.is_set():
                barrier.wait(timeout=5)
                both_read.set()
            return adoption

    slow_store = SlowReadStore(tmp_path / "store.db")
    service = AdoptionService(slow_store)
    outcomes = {}

    def settle(status):
        try:
            outcomes[status] = service.update_status(pending.id, status, admin).status
        except InvalidStatusTransition:
            outcomes[status] = "refused"

    threads = [
        threading.Thread(target=settle, args=(status,))
        for status in (AdoptionStatus.APPROVED, AdoptionStatus.REJECTED)
    ]
    try:
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
    finally:
        slow_store.close()

    assert list(outcomes.values()).count("refused") == 1
    winner = next(status for status, outcome in outcomes.items() if outcome != "refused")
    assert outcomes[winner] is winner
    assert persistence.get_adoption(pending.id).status is winner
