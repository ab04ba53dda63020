from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import InvalidArgument, NotFound, StoreUnavailable
from ..forms import PetForm, parse_pet_id, validate_payload
from ..models.pet import MAX_ID, PET_STATUSES, STATUS_AVAILABLE, Pet
from ..transaction import atomic

logger = logging.getLogger(__name__)


class PetCatalog:
    """Pet records and their ``available -> adopted`` lifecycle."""

    def __init__(self, session: Session):
        self.session = session

    def _store_failure(self, action: str, exc: Exception) -> StoreUnavailable:
        logger.error("Error %s: %s", action, exc, exc_info=True)
        return StoreUnavailable(f"Failed to {action}")

    def list_available(self) -> list[Pet]:
        try:
            return (
                self.session.query(Pet)
                .filter(Pet.status == STATUS_AVAILABLE)
                .order_by(Pet.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._store_failure("fetch pets", exc) from exc

    def get_by_id(self, pet_id) -> Pet:
        pet_id = parse_pet_id(pet_id)
        if pet_id > MAX_ID:
            raise NotFound()
        try:
            pet = self.session.get(Pet, pet_id)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._store_failure("fetch pet details", exc) from exc
        if pet is None:
            raise NotFound()
        return pet

    def insert(self, name, breed, age, description=None, image_url=None) -> int:
        form = validate_payload(
            PetForm,
            {
                "name": name,
                "breed": breed,
                "age": age,
                "description": description,
                "image_url": image_url,
            },
        )
        pet = Pet(
            name=form.name.data,
            breed=form.breed.data,
            age=form.age.data,
            description=form.description.data or None,
            image_url=form.image_url.data or None,
            status=STATUS_AVAILABLE,
        )
        try:
            with atomic(self.session):
                self.session.add(pet)
                self.session.flush()
                pet_id = pet.id
        except SQLAlchemyError as exc:
            raise self._store_failure("add pet", exc) from exc
        logger.info("Added pet %s (%s)", pet_id, form.name.data)
        return pet_id

    def update_status(self, pet_id: int, status: str) -> int:
        """Issue the status UPDATE inside the caller's transaction.

        Returns the number of rows matched.
        """
        if status not in PET_STATUSES:
            raise InvalidArgument(f"Unknown pet status: {status!r}")
        if status == STATUS_AVAILABLE:
            raise InvalidArgument("An adopted pet cannot become available again")
        if pet_id > MAX_ID:
            return 0
        return (
            self.session.query(Pet)
            .filter(Pet.id == pet_id)
            .update({Pet.status: status}, synchronize_session="fetch")
        )

    def set_status(self, pet_id, status: str) -> None:
        pet_id = parse_pet_id(pet_id)
        try:
            with atomic(self.session):
                if not self.update_status(pet_id, status):
                    raise NotFound()
        except SQLAlchemyError as exc:
            raise self._store_failure("update pet status", exc) from exc
        logger.info("Pet %s status set to %s", pet_id, status)
