import mongomock
import pytest
from fastapi.testclient import TestClient

from database import ensure_indexes, get_db
from main import app


@pytest.fixture
def db():
    database = mongomock.MongoClient()["kaaya_test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def offline_client():
    """API with no database configured."""
    app.dependency_overrides[get_db] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


def new_category(client, name, **extra):
    payload = {"name": name, "description": f"{name} products"}
    payload.update(extra)
    response = client.post("/api/categories", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]
