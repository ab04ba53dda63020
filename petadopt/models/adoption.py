from datetime import datetime, timezone

from ..extensions import db
from .pet import _isoformat


class Adoption(db.Model):
    __tablename__ = "adoptions"

    id = db.Column(db.Integer, primary_key=True)

    pet_id = db.Column(
        db.Integer,
        db.ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    adopter_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    address = db.Column(db.Text, nullable=False)

    adoption_date = db.Column(
        db.DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    pet = db.relationship(
        "Pet",
        backref=db.backref(
            "adoptions",
            cascade="all, delete-orphan",
            passive_deletes=True,
        ),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "pet_id": self.pet_id,
            "adopter_name": self.adopter_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "adoption_date": _isoformat(self.adoption_date),
        }
