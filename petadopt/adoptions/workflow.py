from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..catalog.store import PetCatalog
from ..errors import AlreadyAdopted, NotFound, StoreUnavailable, TransactionFailed
from ..forms import AdoptionForm, validate_payload
from ..models.adoption import Adoption
from ..models.pet import MAX_ID, STATUS_ADOPTED, Pet
from ..transaction import atomic

logger = logging.getLogger(__name__)


class AdoptionWorkflow:
    """Moves pets from ``available`` to ``adopted``.

    ``adopt`` writes the adoption record and the status change in a single
    transaction. ``mark_adopted`` is the administrative shortcut that changes
    the status only. With ``reject_adopted`` set, adopting a pet that is
    already adopted raises ``AlreadyAdopted`` instead of recording a second
    adoption.
    """

    def __init__(self, session: Session, catalog: PetCatalog, reject_adopted: bool = False):
        self.session = session
        self.catalog = catalog
        self.reject_adopted = reject_adopted

    def _ensure_adoptable(self, pet_id: int) -> None:
        pet = (
            self.session.query(Pet)
            .filter(Pet.id == pet_id)
            .with_for_update()
            .one_or_none()
        )
        if pet is None:
            raise NotFound()
        if pet.status == STATUS_ADOPTED:
            raise AlreadyAdopted()

    def adopt(self, pet_id, adopter_name, email, phone, address) -> int:
        form = validate_payload(
            AdoptionForm,
            {
                "pet_id": pet_id,
                "adopter_name": adopter_name,
                "email": email,
                "phone": phone,
                "address": address,
            },
        )
        pet_id = form.pet_id.data
        adoption = Adoption(
            pet_id=pet_id,
            adopter_name=form.adopter_name.data,
            email=form.email.data,
            phone=form.phone.data,
            address=form.address.data,
        )
        try:
            with atomic(self.session):
                if pet_id > MAX_ID:
                    raise NotFound()
                if self.reject_adopted:
                    self._ensure_adoptable(pet_id)
                self.session.add(adoption)
                self.session.flush()
                adoption_id = adoption.id
                if not self.catalog.update_status(pet_id, STATUS_ADOPTED):
                    raise NotFound()
        except AlreadyAdopted:
            logger.warning("Rejected duplicate adoption of pet %s", pet_id)
            raise
        except (NotFound, StoreUnavailable, SQLAlchemyError) as exc:
            logger.error("Adoption of pet %s rolled back: %s", pet_id, exc, exc_info=True)
            raise TransactionFailed() from exc

        logger.info("Pet %s adopted, adoption %s", pet_id, adoption_id)
        return adoption_id

    def mark_adopted(self, pet_id) -> None:
        self.catalog.set_status(pet_id, STATUS_ADOPTED)

    def list_adopted(self) -> list[dict]:
        try:
            rows = (
                self.session.query(
                    Adoption.id.label("adoption_id"),
                    Adoption.adopter_name,
                    Adoption.email,
                    Adoption.phone,
                    Adoption.address,
                    Adoption.adoption_date,
                    Pet.id.label("pet_id"),
                    Pet.name.label("pet_name"),
                    Pet.breed,
                    Pet.age,
                    Pet.description,
                )
                .join(Pet, Pet.id == Adoption.pet_id)
                .order_by(Adoption.adoption_date.desc(), Adoption.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error fetching adopted pets: %s", exc, exc_info=True)
            raise StoreUnavailable("Failed to fetch adopted pets") from exc

        report = []
        for row in rows:
            item = row._asdict()
            if item["adoption_date"] is not None:
                item["adoption_date"] = item["adoption_date"].isoformat()
            report.append(item)
        return report
