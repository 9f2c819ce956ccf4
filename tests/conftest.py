# tests/conftest.py
import os
import sys
import pytest

# so that `from app import create_app` works when running from the repo root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app
from extensions import db
from records import RecordStore


@pytest.fixture()
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SECRET_KEY": "test-secret",
        "ENERGY_WH_PER_KM": 50.0,
        "CITY_TOP_WALKERS": 10,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def records(app):
    """RecordStore on the test database, inside an app context for the whole test."""
    with app.app_context():
        yield RecordStore(db.session)


@pytest.fixture()
def seed(app):
    """Run ``fn(records)`` in its own app context, commit, and return its result."""
    def _seed(fn):
        with app.app_context():
            recs = RecordStore(db.session)
            result = fn(recs)
            recs.commit()
            return result
    return _seed
