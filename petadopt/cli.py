from __future__ import annotations

import random

import click
from flask import current_app
from flask_migrate import downgrade, upgrade

from .catalog.store import PetCatalog
from .extensions import db

from .models.pet import Pet
from .models.adoption import Adoption


def _db_uri() -> str:
    return current_app.config.get("SQLALCHEMY_DATABASE_URI", "")

@click.command("init-db")
def init_db_cmd():
    uri = _db_uri()
    click.echo(f"Migrating DB to latest schema: {uri}")
    upgrade()
    click.echo("✔ Schema up to date.")

@click.command("reset-db")
@click.option("--force", is_flag=True, help="Downgrade to base and upgrade again (irreversible).")
def reset_db_cmd(force: bool):
    uri = _db_uri()
    if not force:
        click.echo("Add --force to confirm dropping all tables.")
        return
    click.echo(f"Dropping & recreating tables on DB: {uri}")
    downgrade(revision="base")
    upgrade()
    click.echo("✔ Database reset.")

@click.command("purge-data")
def purge_data_cmd():
    db.session.query(Adoption).delete()
    db.session.query(Pet).delete()
    db.session.commit()
    click.echo("✔ All data removed (schema kept).")

DEMO_PETS = [
    ("Max", "Golden Retriever", 3,
     "Friendly and energetic dog. Loves playing fetch and going for walks. Great with kids and other pets."),
    ("Luna", "Siamese Cat", 2,
     "Gentle and affectionate cat. Enjoys cuddling and playing with toys. Perfect for families."),
    ("Buddy", "Labrador", 5,
     "Loyal and intelligent dog. Well-trained and housebroken. Great companion for active individuals."),
    ("Milo", "Persian Cat", 1,
     "Playful and curious kitten. Loves exploring and climbing. Needs lots of attention and care."),
    ("Charlie", "Beagle", 4,
     "Friendly and outgoing dog. Good with children and loves outdoor activities. Very social and playful."),
    ("Bella", "Maine Coon", 3,
     "Large and gentle cat. Very friendly and gets along with everyone. Loves being petted and groomed."),
]

@click.command("seed-demo")
def seed_demo_cmd():
    catalog = PetCatalog(db.session)
    for name, breed, age, description in DEMO_PETS:
        catalog.insert(name=name, breed=breed, age=age, description=description)
    click.echo(f"✔ Seed done. Pets: {len(DEMO_PETS)}")

PET_NAMES = [
    "Maca", "Rex", "Bobi", "Luna", "Simba", "Molly", "Kaya", "Pufi", "Rocky", "Tara", "Miro", "Sisi",
]
BREEDS = [
    "Domestic Shorthair", "British Shorthair", "Siamese", "Maine Coon",
    "Labrador", "German Shepherd", "Golden Retriever", "Bulldog", "Poodle", "Mix",
]

@click.command("seed-random")
@click.option("--pets", default=20, show_default=True, help="Number of pets to create.")
def seed_random_cmd(pets: int):
    random.seed(42)
    click.echo(f"Seeding on DB: {_db_uri()}")
    catalog = PetCatalog(db.session)
    for _ in range(pets):
        catalog.insert(
            name=random.choice(PET_NAMES),
            breed=random.choice(BREEDS),
            age=random.randint(0, 14),
        )
    click.echo(f"✔ Seed completed: {pets} pets")
