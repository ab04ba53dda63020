import logging
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from petadopt.adoptions.workflow import AdoptionWorkflow
from petadopt.catalog.store import PetCatalog
from petadopt.errors import AlreadyAdopted, InvalidArgument, NotFound, TransactionFailed
from petadopt.extensions import db
from petadopt.models.adoption import Adoption
from petadopt.models.pet import Pet


class BrokenStatusCatalog(PetCatalog):
    def update_status(self, pet_id, status):
        raise OperationalError("UPDATE pets", {}, Exception("database is locked"))


class VanishedPetCatalog(PetCatalog):
    def update_status(self, pet_id, status):
        return 0


@pytest.fixture()
def workflow(catalog):
    return AdoptionWorkflow(db.session, catalog)


def test_adopt_scenario(workflow, catalog, make_pet, adopter):
    pet_id = make_pet("Max", "Golden Retriever", 3)
    assert catalog.get_by_id(pet_id).status == "available"

    adoption_id = workflow.adopt(pet_id, **adopter)

    assert adoption_id > 0
    assert catalog.get_by_id(pet_id).status == "adopted"
    rows = workflow.list_adopted()
    assert len(rows) == 1
    assert rows[0]["pet_name"] == "Max"
    assert rows[0]["adopter_name"] == "Jane Doe"
    assert rows[0]["adoption_id"] == adoption_id

def test_adopt_writes_one_record_with_contact_fields(workflow, sample_data, adopter):
    workflow.adopt(sample_data["luna"], **adopter)

    records = db.session.query(Adoption).all()
    assert len(records) == 1
    a = records[0]
    assert a.pet_id == sample_data["luna"]
    assert (a.adopter_name, a.email, a.phone, a.address) == (
        "Jane Doe", "jane@example.com", "555-1234", "1 Main St",
    )
    assert a.adoption_date is not None

@pytest.mark.parametrize("missing", ["pet_id", "adopter_name", "email", "phone", "address"])
def test_adopt_requires_every_field(workflow, sample_data, adopter, missing):
    fields = dict(adopter, pet_id=sample_data["max"])
    fields[missing] = ""
    with pytest.raises(InvalidArgument):
        workflow.adopt(**fields)
    assert db.session.query(Adoption).count() == 0
    assert db.session.get(Pet, sample_data["max"]).status == "available"

def test_adopt_unknown_pet_leaves_no_adoption(workflow, adopter):
    with pytest.raises(TransactionFailed):
        workflow.adopt(999999, **adopter)
    assert db.session.query(Adoption).count() == 0

def test_failed_status_update_rolls_back_adoption(sample_data, adopter, caplog):
    workflow = AdoptionWorkflow(db.session, BrokenStatusCatalog(db.session))
    with caplog.at_level(logging.ERROR, logger="petadopt.adoptions.workflow"):
        with pytest.raises(TransactionFailed):
            workflow.adopt(sample_data["max"], **adopter)

    assert db.session.query(Adoption).count() == 0
    assert db.session.get(Pet, sample_data["max"]).status == "available"
    assert "rolled back" in caplog.text

def test_zero_rows_updated_rolls_back_adoption(sample_data, adopter):
    workflow = AdoptionWorkflow(db.session, VanishedPetCatalog(db.session))
    with pytest.raises(TransactionFailed):
        workflow.adopt(sample_data["max"], **adopter)
    assert db.session.query(Adoption).count() == 0

def test_duplicate_adoption_allowed_by_default(workflow, sample_data, adopter):
    workflow.adopt(sample_data["max"], **adopter)
    workflow.adopt(sample_data["max"], **dict(adopter, adopter_name="John Roe"))
    assert db.session.query(Adoption).filter_by(pet_id=sample_data["max"]).count() == 2

def test_duplicate_adoption_rejected_when_configured(catalog, sample_data, adopter):
    workflow = AdoptionWorkflow(db.session, catalog, reject_adopted=True)
    workflow.adopt(sample_data["max"], **adopter)
    with pytest.raises(AlreadyAdopted):
        workflow.adopt(sample_data["max"], **dict(adopter, adopter_name="John Roe"))
    assert db.session.query(Adoption).count() == 1

def test_reject_policy_still_fails_unknown_pet_as_transaction(catalog, adopter):
    workflow = AdoptionWorkflow(db.session, catalog, reject_adopted=True)
    with pytest.raises(TransactionFailed):
        workflow.adopt(424242, **adopter)

def test_mark_adopted_changes_status_only(workflow, catalog, sample_data):
    workflow.mark_adopted(sample_data["luna"])
    assert catalog.get_by_id(sample_data["luna"]).status == "adopted"
    assert db.session.query(Adoption).count() == 0
    assert workflow.list_adopted() == []

def test_mark_adopted_missing_pet(workflow, sample_data):
    with pytest.raises(NotFound):
        workflow.mark_adopted(999999)
    assert {p.status for p in db.session.query(Pet)} == {"available"}

def test_mark_adopted_rejects_bad_id(workflow):
    with pytest.raises(InvalidArgument):
        workflow.mark_adopted("not-a-number")

def test_list_adopted_empty(workflow):
    assert workflow.list_adopted() == []

def test_list_adopted_most_recent_first(workflow, make_pet):
    base = datetime(2025, 3, 1, 12, 0)
    for i, name in enumerate(["Max", "Luna", "Buddy"]):
        pet_id = make_pet(name)
        db.session.add(
            Adoption(
                pet_id=pet_id,
                adopter_name=f"Adopter {i}",
                email=f"a{i}@example.com",
                phone="555-0000",
                address="Somewhere",
                adoption_date=base + timedelta(days=(i * 7) % 3),
            )
        )
    db.session.commit()

    rows = workflow.list_adopted()
    dates = [r["adoption_date"] for r in rows]
    assert dates == sorted(dates, reverse=True)
    assert set(rows[0]) == {
        "adoption_id", "adopter_name", "email", "phone", "address", "adoption_date",
        "pet_id", "pet_name", "breed", "age", "description",
    }

def test_deleting_pet_cascades_to_adoptions(workflow, sample_data, adopter):
    workflow.adopt(sample_data["max"], **adopter)
    pet = db.session.get(Pet, sample_data["max"])
    db.session.delete(pet)
    db.session.commit()
    assert db.session.query(Adoption).count() == 0
