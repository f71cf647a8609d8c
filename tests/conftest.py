"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so configure them before the app loads
os.environ["FLEET_DATABASE_URL"] = "sqlite://"
os.environ["FLEET_PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["FLEET_LOG_LEVEL"] = "WARNING"
os.environ.pop("FLEET_BOOTSTRAP_ADMIN_PASSWORD", None)
os.environ.pop("FLEET_SEED_DEMO_DRIVER", None)

import pytest
from fastapi.testclient import TestClient

from fleet_admin.database import Base, SessionLocal, engine
from fleet_admin.main import app
from fleet_admin.models import UserRole
from fleet_admin.services.user_service import UserService

ADMIN_EMAIL = "admin@fleet.test"
ADMIN_NATIONAL_ID = "900100"
ADMIN_PASSWORD = "admin-secret"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def admin_user(db):
    user = UserService.build_user(db, ADMIN_EMAIL, ADMIN_NATIONAL_ID, ADMIN_PASSWORD, UserRole.ADMIN)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


def login(client, identifier, password):
    response = client.post("/api/auth/login", json={"identifier": identifier, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client, admin_user):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def make_route(client, admin_headers):
    counter = {"n": 0}

    def _make(name=None, **fields):
        counter["n"] += 1
        payload = {
            "name": name or f"Route {counter['n']}",
            "origin": "Terminal Norte",
            "destination": "Terminal Sur",
        }
        payload.update(fields)
        response = client.post("/api/routes", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_driver(client, admin_headers):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "full_name": f"Driver {n}",
            "national_id": f"10{n:04d}",
            "email": f"driver{n}@fleet.test",
            "license_number": f"C2-{n:08d}",
            "phone": "3001234567",
        }
        payload.update(fields)
        response = client.post("/api/drivers", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_shift(client, admin_headers):

    def _make(route_id, weekday="MONDAY", start="08:00", end="16:00", week_number=10, **fields):
        payload = {
            "route_id": route_id,
            "weekday": weekday,
            "start_time": start,
            "end_time": end,
            "week_number": week_number,
        }
        payload.update(fields)
        response = client.post("/api/shifts", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
