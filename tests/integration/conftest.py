import os
import sys

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from petadopt import create_app
from petadopt.catalog.store import PetCatalog
from petadopt.extensions import db


def _assert_memory_db(uri: str):
    if uri != "sqlite:///:memory:":
        raise RuntimeError(
            f"Refusing to run tests on non-memory DB: {uri!r}. "
            "This guard protects your real database."
        )


TEST_CONFIG = {
    "TESTING": True,
    "SECRET_KEY": "test-secret-key",
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "SQLALCHEMY_TRACK_MODIFICATIONS": False,
    "ADOPTION_REJECT_ADOPTED": False,
}


@pytest.fixture(scope="function")
def app():
    os.environ.pop("DATABASE_URL", None)

    flask_app = create_app(dict(TEST_CONFIG))

    _assert_memory_db(flask_app.config["SQLALCHEMY_DATABASE_URI"])

    with flask_app.app_context():
        db.create_all()
        yield flask_app
        _assert_memory_db(flask_app.config["SQLALCHEMY_DATABASE_URI"])
        db.session.remove()
        db.drop_all()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def catalog(app):
    return PetCatalog(db.session)

@pytest.fixture()
def make_pet(catalog):
    def _make_pet(name="Max", breed="Golden Retriever", age=3, **extra):
        return catalog.insert(name=name, breed=breed, age=age, **extra)
    return _make_pet

@pytest.fixture()
def sample_data(make_pet):
    return {
        "max": make_pet("Max", "Golden Retriever", 3, description="Loves fetch."),
        "luna": make_pet("Luna", "Siamese Cat", 2),
    }

@pytest.fixture()
def adopter():
    return {
        "adopter_name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-1234",
        "address": "1 Main St",
    }
