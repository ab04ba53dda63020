from flask import Blueprint, jsonify

from ..extensions import db
from ..forms import request_payload
from .store import PetCatalog

catalog_bp = Blueprint("catalog", __name__)


def _catalog() -> PetCatalog:
    return PetCatalog(db.session)


@catalog_bp.get("/api/pets")
def list_pets():
    pets = _catalog().list_available()
    return jsonify([p.to_dict() for p in pets])


@catalog_bp.get("/api/pets/<pet_id>")
def pet_detail(pet_id):
    pet = _catalog().get_by_id(pet_id)
    return jsonify(pet.to_dict())


@catalog_bp.post("/api/add-pet")
def add_pet():
    data = request_payload()
    pet_id = _catalog().insert(
        name=data.get("name"),
        breed=data.get("breed"),
        age=data.get("age"),
        description=data.get("description"),
        image_url=data.get("image_url"),
    )
    return jsonify(
        {"success": True, "message": "Pet added successfully!", "pet_id": pet_id}
    )
