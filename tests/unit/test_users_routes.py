"""
Tests for the /api/users endpoints.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.db.helpers import DatabaseError
from app.dependencies import get_user_service
from app.main import app


@pytest.fixture
def client(user_service):
    app.dependency_overrides[get_user_service] = lambda: user_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_create_user_returns_201(client):
    response = client.post("/api/users", json={"email": "a@b.com", "firstname": "A"})

    assert response.status_code == 201
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["email"] == "a@b.com"
    assert data["firstname"] == "A"

    listed = client.get("/api/users").json()
    assert data in listed


def test_create_user_rejected_returns_403(client, fake_validator, fake_repository):
    fake_validator.valid = False

    response = client.post("/api/users", json={"email": "spam@b.com", "firstname": "S"})

    assert response.status_code == 403
    assert fake_repository.insert_calls == 0
    assert all(user["email"] != "spam@b.com" for user in client.get("/api/users").json())


def test_create_user_validator_down_returns_403(client, fake_validator, fake_repository):
    fake_validator.unavailable = True

    response = client.post("/api/users", json={"email": "a@b.com", "firstname": "A"})

    assert response.status_code == 403
    assert fake_repository.rows == []


def test_create_user_validator_crash_returns_403(client, fake_validator, fake_repository):
    fake_validator.check = AsyncMock(side_effect=RuntimeError("client has been closed"))

    response = client.post("/api/users", json={"email": "a@b.com", "firstname": "A"})

    assert response.status_code == 403
    assert fake_repository.rows == []


def test_create_user_storage_failure_returns_500(client, fake_repository):
    fake_repository.error = DatabaseError("Query failed: relation users does not exist")

    response = client.post("/api/users", json={"email": "a@b.com", "firstname": "A"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_create_user_cache_failure_returns_500(client, fake_redis):
    fake_redis.fail_writes = True

    response = client.post("/api/users", json={"email": "a@b.com", "firstname": "A"})

    assert response.status_code == 500
    assert "connection refused" not in response.text


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@b.com"},
        {"firstname": "A"},
        {"email": "", "firstname": "A"},
        {"email": "a@b.com", "firstname": ""},
    ],
)
def test_create_user_invalid_payload_returns_422(client, fake_validator, payload):
    response = client.post("/api/users", json=payload)

    assert response.status_code == 422
    assert fake_validator.checked == []


def test_list_users_empty(client):
    response = client.get("/api/users")

    assert response.status_code == 200
    assert response.json() == []


def test_list_users_returns_all_created(client):
    created = [
        client.post("/api/users", json={"email": f"user{i}@b.com", "firstname": f"U{i}"}).json()
        for i in range(3)
    ]

    listed = client.get("/api/users").json()

    assert sorted(listed, key=lambda u: u["id"]) == sorted(created, key=lambda u: u["id"])
    assert client.get("/api/users").json() == listed


def test_list_users_storage_failure_returns_500(client, fake_repository):
    fake_repository.error = DatabaseError("Query failed")

    response = client.get("/api/users")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
