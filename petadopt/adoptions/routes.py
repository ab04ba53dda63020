from flask import Blueprint, current_app, jsonify

from ..catalog.store import PetCatalog
from ..extensions import db
from ..forms import request_payload
from .workflow import AdoptionWorkflow

adoptions_bp = Blueprint("adoptions", __name__)


def _workflow() -> AdoptionWorkflow:
    return AdoptionWorkflow(
        db.session,
        PetCatalog(db.session),
        reject_adopted=current_app.config.get("ADOPTION_REJECT_ADOPTED", False),
    )


@adoptions_bp.post("/api/adopt")
def adopt():
    data = request_payload()
    adoption_id = _workflow().adopt(
        pet_id=data.get("pet_id"),
        adopter_name=data.get("adopter_name"),
        email=data.get("email"),
        phone=data.get("phone"),
        address=data.get("address"),
    )
    return jsonify(
        {
            "success": True,
            "message": "Adoption request submitted successfully!",
            "adoption_id": adoption_id,
        }
    )


@adoptions_bp.post("/api/adopt-pet")
def adopt_pet():
    data = request_payload()
    _workflow().mark_adopted(data.get("pet_id"))
    return jsonify({"success": True, "message": "Pet marked as adopted successfully!"})


@adoptions_bp.get("/api/adopted")
def adopted_pets():
    return jsonify(_workflow().list_adopted())
