"""
Test suite for profile endpoints with a mocked UserService.

System role: Verification of the profile HTTP surface
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from bossflow.api.deps.auth import Principal, get_current_principal
from bossflow.api.deps.dependencies import get_user_service
from bossflow.api.main import create_app
from bossflow.core.exceptions import UnauthenticatedError

USER_ID = uuid.uuid4()


@pytest.fixture
def mock_user_service():
    return AsyncMock()


@pytest.fixture
def client(mock_user_service):
    app = create_app()
    app.dependency_overrides[get_current_principal] = lambda: Principal(user_id=USER_ID)
    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    return TestClient(app)


def test_get_stats_uses_camel_case_keys(client, mock_user_service):
    mock_user_service.get_stats.return_value = {"diagrams_created": 4, "nodes_created": 17}

    response = client.get("/api/profile/stats")

    assert response.status_code == 200
    assert response.json() == {"stats": {"diagramsCreated": 4, "nodesCreated": 17}}
    mock_user_service.get_stats.assert_awaited_once_with(USER_ID)


def test_get_profile_omits_password_hash(client, mock_user_service):
    now = datetime.now(timezone.utc)
    mock_user_service.get_profile.return_value = {
        "id": USER_ID,
        "username": "alice",
        "email": "alice@example.com",
        "stats": {"diagrams_created": 1, "nodes_created": 2},
        "created_at": now,
        "updated_at": now,
    }

    response = client.get("/api/profile")

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["username"] == "alice"
    assert user["stats"] == {"diagramsCreated": 1, "nodesCreated": 2}
    assert "passwordHash" not in user
    assert "password_hash" not in user


def test_deleted_account_returns_401(client, mock_user_service):
    mock_user_service.get_stats.side_effect = UnauthenticatedError("Account no longer exists")

    response = client.get("/api/profile/stats")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["detail"]["reason"] == "Unauthenticated"
