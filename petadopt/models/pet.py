from datetime import datetime, timezone
from sqlalchemy import CheckConstraint
from ..extensions import db

STATUS_AVAILABLE = "available"
STATUS_ADOPTED = "adopted"
PET_STATUSES = (STATUS_AVAILABLE, STATUS_ADOPTED)
# upper bound of the INTEGER key columns (MySQL INT)
MAX_ID = 2**31 - 1


def _isoformat(dt):
    return dt.isoformat() if dt is not None else None


class Pet(db.Model):
    __tablename__ = "pets"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(100), nullable=False)
    breed = db.Column(db.String(100), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    description = db.Column(db.Text, nullable=True)
    # unbounded: data URLs do not fit in VARCHAR(255)
    image_url = db.Column(db.Text, nullable=True)

    status = db.Column(
        db.String(20),
        nullable=False,
        default=STATUS_AVAILABLE,
        server_default=STATUS_AVAILABLE,
        index=True,
    )
    created_at = db.Column(
        db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        CheckConstraint("age >= 0", name="ck_pet_age_non_negative"),
        CheckConstraint(
            "status IN ('available', 'adopted')", name="ck_pet_status_known"
        ),
    )

    @property
    def is_available(self) -> bool:
        return self.status == STATUS_AVAILABLE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "breed": self.breed,
            "age": self.age,
            "description": self.description,
            "image_url": self.image_url,
            "status": self.status,
            "created_at": _isoformat(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Pet {self.id} {self.name!r} {self.status}>"
