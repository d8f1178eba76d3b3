"""
Shared test fixtures.

The asyncpg pool is swapped for `fakes.FakePool` so the real app, routers,
services and repositories run against an in-memory database.
"""
import pytest
from starlette.testclient import TestClient

from core import db

from fakes import FakeDatabase, FakePool


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def fake_pool(fake_db, monkeypatch):
    pool = FakePool(fake_db)
    monkeypatch.setattr(db, "_pool", pool)
    return pool


@pytest.fixture
def app(fake_pool):
    from main import app as _app
    return _app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def customer_payload():
    return {
        "firmenname": "Acme",
        "strasse": "Hauptstraße",
        "hausnummer": "12a",
        "ort": "Berlin",
        "plz": "10115",
        "telefonnummer": "030 123456",
        "email": "a@acme.com",
    }


@pytest.fixture
def acme(fake_db, customer_payload):
    """A customer row that already exists."""
    return fake_db.add("kunde", **customer_payload)
