"""Shared fixtures - in-memory MongoDB behind the app's get_mongo_db dependency."""

import os

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import mongomock  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from cohort_api.db.mongodb import get_mongo_db, init_mongo_indexes  # noqa: E402
from cohort_api.main import app  # noqa: E402


@pytest.fixture
def db():
    """Fresh database per test, with the same indexes as production."""
    mongo = mongomock.MongoClient()
    database = mongo["cohort_tracker_test"]
    init_mongo_indexes(database)
    yield database
    mongo.close()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_mongo_db] = lambda: db
    # Not entered as a context manager: startup would try to reach a real server
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def cohort_payload():
    return {
        "slug": "wd-101",
        "name": "Web Dev 101",
        "program": "Web Dev",
        "format": "Full Time",
    }


@pytest.fixture
def cohort(client, cohort_payload):
    response = client.post("/api/cohorts", json=cohort_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def registered_user(client):
    payload = {"email": "Ada@Example.com", "password": "s3cret-pass", "name": "Ada"}
    response = client.post("/auth/signup", json=payload)
    assert response.status_code == 201
    return {**payload, **response.json()}


@pytest.fixture
def auth_headers(client, registered_user):
    response = client.post(
        "/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
